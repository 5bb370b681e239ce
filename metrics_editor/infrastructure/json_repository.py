"""Infrastructure adapter for the JSON record store."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from metrics_editor.domain.models import RecordSet
from metrics_editor.errors import PersistenceError

logger = logging.getLogger(__name__)


class JsonRecordStore:
    """Whole-document read/replace of the record set in a single JSON file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> RecordSet | None:
        if not self.path.exists():
            return None
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise PersistenceError(f"Could not read record store {self.path}: {exc}") from exc
        return RecordSet.from_storage(payload)

    def save(self, record_set: RecordSet) -> None:
        text = json.dumps(record_set.to_storage(), indent=2, ensure_ascii=False)
        tmp_name: str | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                tmp_name = handle.name
                handle.write(text)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise PersistenceError(f"Could not write record store {self.path}: {exc}") from exc
        logger.info("Saved %d months to %s", len(record_set), self.path)
