import json
import os
from dataclasses import dataclass
from typing import Optional

from docexport.docs.export import EXPORT_FORMATS

DEFAULT_FORMAT = "docx"


@dataclass
class ExportSettings:
    output_dir: str = "."
    default_format: str = DEFAULT_FORMAT
    debug_buffer: bool = False


def _project_root() -> str:
    return os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))


def load_export_settings(path: Optional[str] = None) -> ExportSettings:
    """Load export settings from config/export.json, falling back to defaults."""
    settings_path = path or os.path.join(_project_root(), "config", "export.json")
    settings = ExportSettings()

    if not os.path.exists(settings_path):
        print(f"Warning: export.json not found at {settings_path}")
        return settings

    try:
        with open(settings_path, "r", encoding="utf-8") as settings_file:
            cfg = json.load(settings_file) or {}
    except (OSError, ValueError) as exc:
        print(f"Warning: Could not load export settings from {settings_path}: {exc}")
        return settings

    if not isinstance(cfg, dict):
        print(f"Warning: export settings in {settings_path} must be a JSON object")
        return settings

    out_dir = cfg.get("output_dir")
    if out_dir:
        # relative paths are taken from the project root
        settings.output_dir = out_dir if os.path.isabs(out_dir) else os.path.join(_project_root(), out_dir)

    fmt = str(cfg.get("default_format") or DEFAULT_FORMAT).lower()
    if fmt in EXPORT_FORMATS:
        settings.default_format = fmt
    else:
        print(f"Warning: Unknown default_format '{fmt}' in config, using {DEFAULT_FORMAT}")

    settings.debug_buffer = bool(cfg.get("debug_buffer", False))
    return settings
