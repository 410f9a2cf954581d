"""File-backed key-value store.

The file holds a bearer credential, so it is written with owner-only
permissions (0o600) inside an owner-only directory (0o700).
"""

import contextlib
import json
import os
import tempfile
from pathlib import Path
from typing import Optional

from structlog import get_logger

logger = get_logger(__name__)

_STORE_DIR_MODE = 0o700
_STORE_FILE_MODE = 0o600


class FileKeyValueStore:
    """Keeps all keys in one JSON object on disk."""

    def __init__(self, path: str) -> None:
        self._path = Path(path).expanduser().resolve()

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, str]:
        try:
            with open(self._path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning("Could not read session file", path=str(self._path), error=str(e))
            return {}
        if not isinstance(data, dict):
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write(self, data: dict[str, str]) -> None:
        """Write the whole mapping atomically via temp-file-then-rename."""
        directory = self._path.parent
        os.makedirs(directory, mode=_STORE_DIR_MODE, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(dir=str(directory), suffix=".tmp", prefix=".session_")
        fd_owned = True
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                fd_owned = False  # os.fdopen took ownership; it will close fd
                json.dump(data, f)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_path, _STORE_FILE_MODE)
            Path(tmp_path).replace(self._path)
        except BaseException:
            if fd_owned:
                with contextlib.suppress(OSError):
                    os.close(fd)
            with contextlib.suppress(OSError):
                Path(tmp_path).unlink()
            raise

    def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if key not in data:
            return
        del data[key]
        self._write(data)
