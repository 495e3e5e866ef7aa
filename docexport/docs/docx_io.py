from __future__ import annotations

import base64
import io

from docx import Document as DocxDocument
from docx.shared import Emu

from .errors import SerializationError
from .model import (
    ExtractedDocument,
    Element,
    HeaderElement,
    ImageElement,
    ParagraphElement,
    TableElement,
    TitleElement,
    UnknownElement,
)

MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def _add_table(d, item: TableElement) -> None:
    if not item.rows:
        # nothing to lay out, keep the element's place in reading order
        d.add_paragraph()
        return
    table = d.add_table(rows=len(item.rows), cols=max(1, item.column_count))
    for r, row in enumerate(item.rows):
        cells = table.rows[r].cells
        for c, value in enumerate(row):
            cells[c].text = value


def _add_image(d, item: ImageElement, avail_width: int) -> None:
    if not item.data:
        raise ValueError("empty image payload")
    raw = base64.b64decode(item.data, validate=True)
    shape = d.add_picture(io.BytesIO(raw))
    # Fit to the text column, never upscale
    if shape.width > avail_width:
        shape.height = Emu(int(shape.height * avail_width / shape.width))
        shape.width = Emu(int(avail_width))


def _add_element(d, item: Element, avail_width: int) -> None:
    if isinstance(item, TitleElement):
        d.add_paragraph(item.text, style="Heading 1")
    elif isinstance(item, HeaderElement):
        d.add_paragraph(item.text, style="Heading 2")
    elif isinstance(item, ParagraphElement):
        d.add_paragraph(item.text)
    elif isinstance(item, TableElement):
        _add_table(d, item)
    elif isinstance(item, ImageElement):
        _add_image(d, item, avail_width)
    elif isinstance(item, UnknownElement):
        d.add_paragraph(item.text)
    else:
        raise TypeError(f"unexpected element type {type(item).__name__}")


def export_docx(doc: ExtractedDocument) -> bytes:
    """Serialize the document as a .docx package.

    Raises SerializationError naming the failing element; partial output is
    discarded.
    """
    d = DocxDocument()
    section = d.sections[0]
    # Available width = page width - (left+right) margins
    avail_width = section.page_width - section.left_margin - section.right_margin
    for index, item in enumerate(doc):
        try:
            _add_element(d, item, avail_width)
        except Exception as e:
            raise SerializationError(index, getattr(item, "tag", None), str(e) or type(e).__name__) from e

    out = io.BytesIO()
    try:
        d.save(out)
    except Exception as e:
        raise SerializationError(None, None, str(e) or type(e).__name__) from e
    return out.getvalue()


def write_docx(doc: ExtractedDocument, out_path: str) -> str:
    data = export_docx(doc)
    with open(out_path, "wb") as f:
        f.write(data)
    return out_path
