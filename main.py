"""
Entry point and API facade for the extracted-content export pipeline.

This module re-exports the public API and provides a CLI.

Packages:
- docexport.docs: document model, JSON reader, TXT/DOCX writers, export session
- docexport.render: HTML preview of extracted content
"""

from __future__ import annotations

# Document model and reader
from docexport.docs import (
    ExtractedDocument,
    read_elements,
    loads_document,
    load_document,
)

# Writers and export helpers
from docexport.docs import (
    export_text,
    export_docx,
    export_filename,
    save_export,
    SerializationError,
)
from docexport.render import render_html

# Session pipeline
from docexport.docs.pipeline import ExtractionSession, export_document, process_extraction

__all__ = [
    # model
    "ExtractedDocument",
    "read_elements",
    "loads_document",
    "load_document",
    # writers
    "export_text",
    "export_docx",
    "export_filename",
    "save_export",
    "SerializationError",
    # preview
    "render_html",
    # pipeline
    "ExtractionSession",
    "export_document",
    "process_extraction",
]


def _cli() -> None:
    """CLI for exporting a saved extraction result.

    --content / -c: Path to the JSON array returned by the extraction service
    --source / -s: Original file name, used to name the output (default: content file)
    --format / -f: Output format (txt|docx), default from config/export.json
    --out-dir / -o: Output directory, default from config/export.json
    --preview: Also write an HTML preview to this path
    --debug-buffer: Keep buffer under config/buffer (default: False)
    """
    import argparse

    from docexport.config import load_export_settings
    from docexport.docs.export import EXPORT_FORMATS

    parser = argparse.ArgumentParser(description="Export extracted document content as plain text or Word.")
    parser.add_argument("--content", "-c", type=str, help="Path to extracted content (JSON array)")
    parser.add_argument("--source", "-s", type=str, default=None, help="Original source file name used for the output name")
    parser.add_argument("--format", "-f", type=str, default=None, choices=sorted(EXPORT_FORMATS), help="Output format (default: from config)")
    parser.add_argument("--out-dir", "-o", type=str, default=None, help="Output directory (default: from config)")
    parser.add_argument("--preview", type=str, default=None, help="Write an HTML preview to this path")
    parser.add_argument("--debug-buffer", action="store_true", help="Keep buffer directory under config/buffer")

    args = parser.parse_args()

    if not args.content:
        print("Please provide --content path to the extracted content JSON.")
        print("Example:\n  python main.py --content extracted.json --source report.pdf --format txt")
        raise SystemExit(2)

    settings = load_export_settings()
    try:
        result = process_extraction(
            content_path=args.content,
            source_name=args.source,
            out_format=args.format or settings.default_format,
            out_dir=args.out_dir or settings.output_dir,
            preview_path=args.preview,
            debug_buffer=bool(args.debug_buffer) or settings.debug_buffer,
        )
    except FileNotFoundError as e:
        print(str(e))
        raise SystemExit(2)
    except (ValueError, RuntimeError, SerializationError, OSError) as e:
        print(f"Export failed: {e}")
        raise SystemExit(1)

    # Print produced paths
    for k, v in result.items():
        print(f"{k}: {v}")


if __name__ == "__main__":
    _cli()
