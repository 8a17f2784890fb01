from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from domain.models import ScheduleDocument


class ScheduleRepository(Protocol):
    def load_all(self, directory: Path) -> Sequence[ScheduleDocument]: ...

    def load_all_with_paths(self, directory: Path) -> Sequence[tuple[Path, ScheduleDocument]]: ...

    def load_by_path(self, path: Path) -> ScheduleDocument: ...

    def save(self, document: ScheduleDocument, path: Path) -> None: ...
