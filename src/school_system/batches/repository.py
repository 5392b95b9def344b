from __future__ import annotations

from typing import Optional, Protocol

from .model import Batch, Level


class BatchRepository(Protocol):
    def get_by_id(self, batch_id: int) -> Optional[Batch]:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError

    def get_level(self, level_id: int) -> Optional[Level]:
        raise NotImplementedError
