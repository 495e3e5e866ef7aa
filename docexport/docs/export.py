"""Output formats, artifact naming and the scoped save of exported bytes."""

from __future__ import annotations

import os
import shutil
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from .buffer import BufferManager
from .docx_io import MIME_TYPE as DOCX_MIME_TYPE, export_docx
from .model import ExtractedDocument
from .txt import export_text

FILENAME_PREFIX = "extracted_content_"
FALLBACK_STEM = "document"


@dataclass(frozen=True)
class ExportFormat:
    key: str
    extension: str
    mime_type: str
    writer: Callable[[ExtractedDocument], bytes]


EXPORT_FORMATS: Dict[str, ExportFormat] = {
    "txt": ExportFormat("txt", "txt", "text/plain", export_text),
    "docx": ExportFormat("docx", "docx", DOCX_MIME_TYPE, export_docx),
}


def get_format(key: str) -> ExportFormat:
    fmt = EXPORT_FORMATS.get((key or "").lower())
    if fmt is None:
        raise ValueError(f"Unsupported export format: {key!r} (expected one of {', '.join(EXPORT_FORMATS)})")
    return fmt


def export_filename(source_name: Optional[str], extension: str) -> str:
    """extracted_content_<stem>.<ext>, with 'document' when no usable name is known."""
    stem = ""
    if source_name:
        # accept both separators, names may come from another platform
        base = os.path.basename(source_name.replace("\\", "/"))
        stem = os.path.splitext(base)[0].strip()
    return f"{FILENAME_PREFIX}{stem or FALLBACK_STEM}.{extension.lstrip('.')}"


def save_export(
    data: bytes,
    filename: str,
    out_dir: str = ".",
    buffer: Optional[BufferManager] = None,
) -> str:
    """Write exported bytes to out_dir/filename and return the final path.

    The bytes land in a temporary buffer file first and are moved into place,
    so a failed write never leaves a truncated artifact. A buffer created here
    is always released; a caller-owned buffer is left to its owner.
    """
    own_buffer = buffer is None
    buf = buffer or BufferManager()
    try:
        tmp_path = buf.path(filename + ".part")
        with open(tmp_path, "wb") as f:
            f.write(data)
        os.makedirs(out_dir, exist_ok=True)
        out_path = os.path.join(out_dir, filename)
        shutil.move(tmp_path, out_path)
        return out_path
    finally:
        if own_buffer:
            buf.cleanup()
