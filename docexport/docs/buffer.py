from __future__ import annotations

import os
import shutil
import tempfile
import time
from typing import Optional


class BufferManager:
    """Session buffer under config/buffer/<timestamp>-<suffix> for temporary files.

    Debug mode keeps the buffer on disk; release mode removes it on cleanup().
    Usable as a context manager, which always cleans up on exit.
    """

    def __init__(self, project_root: Optional[str] = None, debug: bool = False) -> None:
        self.debug = bool(debug)
        root = project_root or os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
        base = os.path.join(root, "config", "buffer")
        os.makedirs(base, exist_ok=True)
        ts = time.strftime("%Y%m%d-%H%M%S")
        self.base_dir = tempfile.mkdtemp(prefix=f"{ts}-", dir=base)

    def path(self, *parts: str) -> str:
        p = os.path.join(self.base_dir, *parts)
        os.makedirs(os.path.dirname(p), exist_ok=True)
        return p

    def cleanup(self) -> None:
        if not self.debug:
            shutil.rmtree(self.base_dir, ignore_errors=True)

    def __enter__(self) -> "BufferManager":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()
