"""Extracted-content document layer.

Exposes:
- Data model: ExtractedDocument and the element types (Title, Header,
  Paragraph, Table, Image, Unknown)
- Reader: JSON array from the extraction service -> ExtractedDocument
- Writers: plain text (.txt) and Word (.docx)
- Export helpers: output formats, artifact naming, scoped save via BufferManager
"""

from .model import (
    ExtractedDocument,
    Element,
    TitleElement,
    HeaderElement,
    ParagraphElement,
    TableElement,
    ImageElement,
    UnknownElement,
)
from .errors import DocumentExportError, ValidationError, UnsupportedElementError, SerializationError
from .buffer import BufferManager
from .json_io import read_elements, loads_document, load_document
from .txt import export_text, write_txt
from .docx_io import export_docx, write_docx
from .export import EXPORT_FORMATS, ExportFormat, export_filename, save_export

__all__ = [
    "ExtractedDocument",
    "Element",
    "TitleElement",
    "HeaderElement",
    "ParagraphElement",
    "TableElement",
    "ImageElement",
    "UnknownElement",
    "DocumentExportError",
    "ValidationError",
    "UnsupportedElementError",
    "SerializationError",
    "BufferManager",
    "read_elements",
    "loads_document",
    "load_document",
    "export_text",
    "write_txt",
    "export_docx",
    "write_docx",
    "EXPORT_FORMATS",
    "ExportFormat",
    "export_filename",
    "save_export",
]
