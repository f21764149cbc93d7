from __future__ import annotations

import json
import os
import re
import tempfile
from pathlib import Path
from typing import Sequence

from ..common.logging_utils import get_logger
from ..core.constants import PUNCH_FILE_SUFFIX
from ..core.exceptions import StorageError, ValidationError
from .model import LoadedPunchLog, Punch, parse_punch_records
from .repository import PunchRepository

logger = get_logger("punches.json_repository")

_SAFE_USERNAME = re.compile(r"^[A-Za-z0-9_.@-]+$")


class JsonPunchRepository(PunchRepository):
    """One JSON array per user: <data_dir>/<username>-punches.json."""

    def __init__(self, data_dir: str | Path):
        self._data_dir = Path(data_dir)

    def path_for(self, username: str) -> Path:
        if not username or not _SAFE_USERNAME.match(username) or username.startswith("."):
            raise ValidationError("Invalid username")
        return self._data_dir / f"{username}{PUNCH_FILE_SUFFIX}"

    def load(self, username: str) -> LoadedPunchLog:
        path = self.path_for(username)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return LoadedPunchLog()
        except OSError as e:
            raise StorageError(f"Cannot read punches for {username}") from e

        try:
            records = json.loads(raw) if raw.strip() else []
        except json.JSONDecodeError as e:
            raise StorageError(f"Punch file for {username} is not valid JSON") from e

        if not isinstance(records, list):
            raise StorageError(f"Punch file for {username} must hold a list")

        loaded = parse_punch_records(records)
        for err in loaded.rejected:
            logger.warning("Dropped punch record for %s: %s", username, err)
        return loaded

    def save(self, username: str, punches: Sequence[Punch]) -> None:
        path = self.path_for(username)
        payload = json.dumps([p.to_dict() for p in punches], indent=2)

        tmp_name = None
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{username}-", suffix=".tmp", dir=self._data_dir)
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as e:
            raise StorageError(f"Cannot save punches for {username}") from e
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
