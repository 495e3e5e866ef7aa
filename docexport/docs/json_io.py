"""Reader for the JSON array returned by the extraction service.

Each array item is an object with a ``type`` tag and a tag-specific payload:

- Title / Header / Paragraph: ``text``
- Table: ``data`` (list of rows, each a list of cells; ``rows`` also accepted)
- Image: ``src`` (base64, optionally as a ``data:<mime>;base64,`` URI)

Unknown tags are preserved as UnknownElement. A malformed field never aborts
the whole document: it is replaced by a safe default and reported.
"""

from __future__ import annotations

import json
from typing import Any, List, Optional, Tuple

from .errors import ValidationError
from .model import (
    HEADER,
    IMAGE,
    PARAGRAPH,
    TABLE,
    TITLE,
    Element,
    ExtractedDocument,
    HeaderElement,
    ImageElement,
    ParagraphElement,
    TableElement,
    TitleElement,
    UnknownElement,
)

_TEXT_TYPES = {
    TITLE: TitleElement,
    HEADER: HeaderElement,
    PARAGRAPH: ParagraphElement,
}


def _require_text(item: dict, index: int, key: str = "text") -> str:
    if key not in item or item[key] is None:
        raise ValidationError(index, key, "missing")
    value = item[key]
    if isinstance(value, (dict, list)):
        raise ValidationError(index, key, f"expected a string, got {type(value).__name__}")
    return str(value)


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _require_rows(item: dict, index: int) -> Tuple[Tuple[str, ...], ...]:
    raw = item.get("data")
    if raw is None:
        raw = item.get("rows")
    if not isinstance(raw, list) or not raw:
        raise ValidationError(index, "data", "table needs at least one row")
    rows: List[Tuple[str, ...]] = []
    for r, row in enumerate(raw):
        if not isinstance(row, list):
            raise ValidationError(index, "data", f"row {r} is not a list")
        rows.append(tuple(_cell_text(c) for c in row))
    return tuple(rows)


def _require_image(item: dict, index: int) -> str:
    src = _require_text(item, index, "src").strip()
    # accept full data URIs as well as bare base64
    if src.startswith("data:") and "," in src:
        src = src.split(",", 1)[1]
    src = "".join(src.split())
    if not src:
        raise ValidationError(index, "src", "empty image payload")
    return src


def _read_element(item: Any, index: int, issues: List[ValidationError]) -> Element:
    if not isinstance(item, dict):
        issues.append(ValidationError(index, "type", f"expected an object, got {type(item).__name__}"))
        return UnknownElement(tag="", text="")

    tag = item.get("type")
    tag = "" if tag is None else str(tag)

    if tag in _TEXT_TYPES:
        try:
            text = _require_text(item, index)
        except ValidationError as e:
            issues.append(e)
            text = ""
        return _TEXT_TYPES[tag](text=text)

    if tag == TABLE:
        try:
            rows = _require_rows(item, index)
        except ValidationError as e:
            issues.append(e)
            rows = ()
        return TableElement(rows=rows)

    if tag == IMAGE:
        try:
            data = _require_image(item, index)
        except ValidationError as e:
            issues.append(e)
            data = ""
        return ImageElement(data=data)

    text = item.get("text")
    if isinstance(text, (dict, list)):
        text = None
    return UnknownElement(tag=tag, text="" if text is None else str(text))


def read_elements(items: Any, issues: Optional[List[ValidationError]] = None) -> ExtractedDocument:
    """Build a document from the decoded JSON array.

    Validation problems are appended to ``issues`` when given, otherwise
    printed as warnings.
    """
    if not isinstance(items, list):
        raise ValueError(f"Extraction result must be a JSON array, got {type(items).__name__}")

    collected: List[ValidationError] = []
    elements = tuple(_read_element(item, i, collected) for i, item in enumerate(items))

    if issues is not None:
        issues.extend(collected)
    else:
        for e in collected:
            print(f"Warning: {e}")
    return ExtractedDocument(elements=elements)


def loads_document(text: str, issues: Optional[List[ValidationError]] = None) -> ExtractedDocument:
    return read_elements(json.loads(text), issues=issues)


def load_document(path: str, issues: Optional[List[ValidationError]] = None) -> ExtractedDocument:
    with open(path, "r", encoding="utf-8") as f:
        return read_elements(json.load(f), issues=issues)
