"""HTML preview of an extracted document.

Each element maps to exactly one fragment, in reading order. Images are
decoded with PIL to confirm they are rasters before being inlined.
"""

from __future__ import annotations

import base64
import binascii
import html
import io
from dataclasses import dataclass
from typing import List, Optional

from PIL import Image, UnidentifiedImageError

from docexport.docs.model import (
    ExtractedDocument,
    Element,
    HeaderElement,
    ImageElement,
    ParagraphElement,
    TableElement,
    TitleElement,
    UnknownElement,
)

IMAGE_STYLE = "max-width:100%;height:auto"

PAGE_CSS = """
body { font-family: sans-serif; margin: 2rem; color: #334155; }
h1 { font-size: 1.5rem; font-weight: bold; color: #0f172a; }
h2 { font-size: 1.25rem; font-weight: 600; color: #1e293b; }
table { border-collapse: collapse; min-width: 100%; }
thead { background: #f8fafc; }
th { text-align: left; font-size: 0.75rem; text-transform: uppercase; padding: 0.75rem 1.5rem; }
td { padding: 1rem 1.5rem; white-space: nowrap; }
tr.even { background: #ffffff; }
tr.odd { background: #f8fafc; }
.image-error { color: #b91c1c; }
"""


@dataclass(frozen=True)
class Fragment:
    index: int
    tag: str
    kind: str  # outer HTML element name
    html: str


def _image_mime(data: str) -> Optional[str]:
    """Return the MIME type of a base64 raster, or None when it does not decode."""
    try:
        raw = base64.b64decode(data, validate=True)
        with Image.open(io.BytesIO(raw)) as img:
            img.verify()
            fmt = img.format
    except (binascii.Error, ValueError, SyntaxError, UnidentifiedImageError, Image.DecompressionBombError, OSError):
        return None
    return Image.MIME.get(fmt or "", "image/png")


def _table_html(item: TableElement) -> str:
    if not item.rows:
        return "<table></table>"
    header = "".join(f"<th>{html.escape(cell)}</th>" for cell in item.rows[0])
    body: List[str] = []
    for i, row in enumerate(item.rows[1:]):
        band = "even" if i % 2 == 0 else "odd"
        cells = "".join(f"<td>{html.escape(cell)}</td>" for cell in row)
        body.append(f'<tr class="{band}">{cells}</tr>')
    return f"<table><thead><tr>{header}</tr></thead><tbody>{''.join(body)}</tbody></table>"


def render_element(item: Element, index: int) -> Fragment:
    if isinstance(item, TitleElement):
        return Fragment(index, item.tag, "h1", f"<h1>{html.escape(item.text)}</h1>")
    if isinstance(item, HeaderElement):
        return Fragment(index, item.tag, "h2", f"<h2>{html.escape(item.text)}</h2>")
    if isinstance(item, ParagraphElement):
        return Fragment(index, item.tag, "p", f"<p>{html.escape(item.text)}</p>")
    if isinstance(item, TableElement):
        return Fragment(index, item.tag, "table", _table_html(item))
    if isinstance(item, ImageElement):
        mime = _image_mime(item.data) if item.data else None
        if mime is None:
            print(f"Warning: image at element {index} could not be decoded; showing placeholder")
            return Fragment(index, item.tag, "div", '<div class="image-error">[image could not be displayed]</div>')
        src = f"data:{mime};base64,{item.data}"
        return Fragment(
            index,
            item.tag,
            "img",
            f'<img src="{html.escape(src, quote=True)}" alt="Extracted image" style="{IMAGE_STYLE}">',
        )
    # unknown tag: show whatever text came with it
    text = item.text if isinstance(item, UnknownElement) else ""
    return Fragment(index, getattr(item, "tag", ""), "div", f"<div>{html.escape(text)}</div>")


def render_fragments(doc: ExtractedDocument) -> List[Fragment]:
    return [render_element(item, i) for i, item in enumerate(doc)]


def render_html(doc: ExtractedDocument, title: str = "Extracted Content") -> str:
    """Render a standalone HTML page for the document."""
    body = "\n".join(f.html for f in render_fragments(doc))
    return (
        "<!DOCTYPE html>\n"
        '<html><head><meta charset="utf-8">'
        f"<title>{html.escape(title)}</title>"
        f"<style>{PAGE_CSS}</style></head>\n"
        f'<body><div class="extracted-content">\n{body}\n</div></body></html>\n'
    )
