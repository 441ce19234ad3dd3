"""Atomic JSON file persistence."""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

from .exceptions import CorruptStateError


def write_json_atomic(path: Path, data: Any) -> None:
    """Write JSON so that readers never observe a half-written file.

    The data is written to a temporary file in the same directory, flushed to
    disk, then renamed over the target.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def read_json(path: Path, project_name: Optional[str] = None) -> Any:
    """Read a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist
        CorruptStateError: If the file is not valid UTF-8 JSON
    """
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise CorruptStateError(project_name, path, f"invalid UTF-8: {e}") from e
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise CorruptStateError(project_name, path, f"invalid JSON: {e}") from e
