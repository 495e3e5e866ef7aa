from __future__ import annotations

import enum
import json
import os
from typing import Any, Callable, Dict, List, Optional

from .buffer import BufferManager
from .errors import SerializationError, ValidationError
from .export import export_filename, get_format, save_export
from .json_io import read_elements
from .model import ExtractedDocument
from docexport.render.preview import render_html

# path of the selected source file -> decoded JSON array
Extractor = Callable[[str], Any]


class ToolState(enum.Enum):
    IDLE = "idle"
    FILE_SELECTED = "file_selected"
    EXTRACTING = "extracting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


def export_document(
    doc: ExtractedDocument,
    fmt: str,
    source_name: Optional[str] = None,
    out_dir: str = ".",
    buffer: Optional[BufferManager] = None,
) -> str:
    """Serialize `doc` in the requested format and save it under out_dir.

    Returns the written path. Raises ValueError for an empty document or an
    unknown format, SerializationError when the encoder fails.
    """
    if not doc:
        raise ValueError("Nothing to export: the document has no elements")
    spec = get_format(fmt)
    data = spec.writer(doc)
    filename = export_filename(source_name, spec.extension)
    return save_export(data, filename, out_dir=out_dir, buffer=buffer)


def saved_result_extractor(content_path: str) -> Extractor:
    """Extractor that replays a previously saved extraction result (JSON array)."""

    def _extract(_source_path: str) -> Any:
        with open(content_path, "r", encoding="utf-8") as f:
            return json.load(f)

    return _extract


class ExtractionSession:
    """Holds the state of one text-extraction tool instance.

    Idle -> FileSelected -> Extracting -> Succeeded | Failed. Selecting a new
    file from any settled state resets to FileSelected and drops the model.
    Export is only reachable from Succeeded with a non-empty document.
    """

    def __init__(self, out_dir: str = ".", debug_buffer: bool = False, buffer_root: Optional[str] = None) -> None:
        self.out_dir = out_dir
        self.debug_buffer = debug_buffer
        self.buffer_root = buffer_root
        self.state = ToolState.IDLE
        self.source_path: Optional[str] = None
        self.document = ExtractedDocument.empty()
        self.error: Optional[str] = None
        self.export_error: Optional[str] = None
        self.issues: List[ValidationError] = []

    def select_file(self, path: str) -> None:
        if self.state is ToolState.EXTRACTING:
            raise RuntimeError("Cannot select a new file while extraction is in progress")
        self.source_path = path
        self.document = ExtractedDocument.empty()
        self.error = None
        self.export_error = None
        self.issues = []
        self.state = ToolState.FILE_SELECTED

    def extract(self, extractor: Extractor) -> ExtractedDocument:
        if self.state is ToolState.EXTRACTING:
            raise RuntimeError("Extraction already in progress")
        if self.state is ToolState.IDLE or self.source_path is None:
            raise RuntimeError("Select a file before extracting")

        self.state = ToolState.EXTRACTING
        self.document = ExtractedDocument.empty()
        self.error = None
        self.export_error = None
        try:
            try:
                issues: List[ValidationError] = []
                doc = read_elements(extractor(self.source_path), issues=issues)
            except Exception as e:
                self.error = f"Failed to extract content from {os.path.basename(self.source_path)}: {e}"
                self.state = ToolState.FAILED
                print(f"Warning: {self.error}")
                return self.document

            for issue in issues:
                print(f"Warning: {issue}")
            self.issues = issues
            self.document = doc
            self.state = ToolState.SUCCEEDED
            return doc
        finally:
            # interrupted (KeyboardInterrupt etc.): never leave the session stuck
            if self.state is ToolState.EXTRACTING:
                self.error = f"Extraction of {os.path.basename(self.source_path)} was interrupted"
                self.state = ToolState.FAILED

    @property
    def can_export(self) -> bool:
        return self.state is ToolState.SUCCEEDED and bool(self.document)

    def preview(self) -> str:
        title = os.path.basename(self.source_path) if self.source_path else "Extracted Content"
        return render_html(self.document, title=title)

    def export(self, fmt: str) -> str:
        if not self.can_export:
            raise RuntimeError("Nothing to export: run a successful extraction first")
        self.export_error = None
        buffer = BufferManager(project_root=self.buffer_root, debug=self.debug_buffer)
        try:
            return export_document(
                self.document,
                fmt,
                source_name=self.source_path,
                out_dir=self.out_dir,
                buffer=buffer,
            )
        except SerializationError as e:
            self.export_error = f"Failed to export as {fmt}: {e}"
            print(f"Warning: {self.export_error}")
            raise
        finally:
            buffer.cleanup()


def process_extraction(
    content_path: str,
    source_name: Optional[str] = None,
    out_format: str = "docx",
    out_dir: str = ".",
    preview_path: Optional[str] = None,
    debug_buffer: bool = False,
) -> Dict[str, str]:
    """Load a saved extraction result, export it and optionally write a preview.

    Returns a mapping of artifact kind to written path.
    """
    if not os.path.exists(content_path):
        raise FileNotFoundError(f"File not found: {content_path}")

    session = ExtractionSession(out_dir=out_dir, debug_buffer=debug_buffer)
    session.select_file(source_name or content_path)
    session.extract(saved_result_extractor(content_path))
    if session.state is ToolState.FAILED:
        raise RuntimeError(session.error)
    if not session.can_export:
        raise ValueError(f"Nothing to export: {content_path} contains no elements")

    out: Dict[str, str] = {out_format: session.export(out_format)}
    if preview_path:
        with open(preview_path, "w", encoding="utf-8") as f:
            f.write(session.preview())
        out["preview"] = preview_path
    return out
