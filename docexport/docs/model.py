from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Tuple, Union

TITLE = "Title"
HEADER = "Header"
PARAGRAPH = "Paragraph"
TABLE = "Table"
IMAGE = "Image"


@dataclass(frozen=True)
class TitleElement:
    text: str = ""
    tag: str = field(default=TITLE, init=False)


@dataclass(frozen=True)
class HeaderElement:
    text: str = ""
    tag: str = field(default=HEADER, init=False)


@dataclass(frozen=True)
class ParagraphElement:
    text: str = ""
    tag: str = field(default=PARAGRAPH, init=False)


@dataclass(frozen=True)
class TableElement:
    # rows[0] is the header row; rows may be ragged
    rows: Tuple[Tuple[str, ...], ...] = ()
    tag: str = field(default=TABLE, init=False)

    @property
    def column_count(self) -> int:
        return max((len(r) for r in self.rows), default=0)


@dataclass(frozen=True)
class ImageElement:
    data: str = ""  # base64 payload, no data: prefix
    tag: str = field(default=IMAGE, init=False)


@dataclass(frozen=True)
class UnknownElement:
    tag: str
    text: str = ""


Element = Union[
    TitleElement,
    HeaderElement,
    ParagraphElement,
    TableElement,
    ImageElement,
    UnknownElement,
]


@dataclass(frozen=True)
class ExtractedDocument:
    """Ordered, immutable sequence of extracted elements.

    A new instance replaces the old one on re-extraction; elements are never
    edited in place.
    """

    elements: Tuple[Element, ...] = ()

    @classmethod
    def empty(cls) -> "ExtractedDocument":
        return cls()

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self) -> Iterator[Element]:
        return iter(self.elements)

    def __getitem__(self, index: int) -> Element:
        return self.elements[index]

    def __bool__(self) -> bool:
        return bool(self.elements)
