from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from adapters.filesystem.json_utils import load_json_object, write_json_atomic
from domain.models import ScheduleDocument
from domain.ports.repositories import ScheduleRepository

logger = logging.getLogger(__name__)


class FileSystemScheduleRepository(ScheduleRepository):
    def load_all(self, directory: Path) -> List[ScheduleDocument]:
        return [document for _, document in self.load_all_with_paths(directory)]

    def load_all_with_paths(self, directory: Path) -> List[tuple[Path, ScheduleDocument]]:
        documents: List[tuple[Path, ScheduleDocument]] = []
        for path in sorted(directory.glob("*.json")):
            documents.append((path, self.load_by_path(path)))
        return documents

    def load_by_path(self, path: Path) -> ScheduleDocument:
        if not path.exists():
            msg = f"Schedule file not found: {path}"
            raise FileNotFoundError(msg)
        document = ScheduleDocument.model_validate(load_json_object(path))
        logger.debug("Loaded %d lectures from %s", len(document.lectures), path)
        return document

    def save(self, document: ScheduleDocument, path: Path) -> None:
        write_json_atomic(path, document.to_schedule_dict())
