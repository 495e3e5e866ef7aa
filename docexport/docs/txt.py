from __future__ import annotations

from typing import List, Tuple

from .errors import UnsupportedElementError
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

TARGET = "plain text"


def _text_block(item: Element, index: int) -> str:
    """Return the block for one element, including its trailing blank line."""
    if isinstance(item, TitleElement):
        return f"# {item.text}\n\n"
    if isinstance(item, HeaderElement):
        return f"## {item.text}\n\n"
    if isinstance(item, ParagraphElement):
        return f"{item.text}\n\n"
    if isinstance(item, TableElement):
        # header and data rows look the same here
        return "".join("\t".join(row) + "\n" for row in item.rows) + "\n"
    if isinstance(item, ImageElement):
        raise UnsupportedElementError(index, item.tag, TARGET)
    if isinstance(item, UnknownElement):
        return f"{item.text}\n\n"
    raise UnsupportedElementError(index, type(item).__name__, TARGET)


def export_text(doc: ExtractedDocument) -> bytes:
    """Serialize the document as UTF-8 markdown-flavoured plain text.

    Each element becomes a block followed by a blank line. Images cannot be
    represented and are skipped; everything else keeps its order.
    """
    parts: List[str] = []
    for index, item in enumerate(doc):
        try:
            parts.append(_text_block(item, index))
        except UnsupportedElementError:
            continue
    return "".join(parts).encode("utf-8")


def skipped_elements(doc: ExtractedDocument) -> List[Tuple[int, str]]:
    """(index, tag) of every element the text export leaves out."""
    out: List[Tuple[int, str]] = []
    for index, item in enumerate(doc):
        try:
            _text_block(item, index)
        except UnsupportedElementError as e:
            out.append((e.index, e.tag))
    return out


def write_txt(doc: ExtractedDocument, out_path: str) -> str:
    with open(out_path, "wb") as f:
        f.write(export_text(doc))
    return out_path
