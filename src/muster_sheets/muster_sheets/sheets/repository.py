from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import TimeFormat
from .model import MusterSheet


class SheetRepository(Protocol):
    """Repository interface for muster sheets.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def create_sheet(
        self,
        *,
        creator_id: str,
        title: str,
        description: Optional[str],
        required_fields: Sequence[str],
        time_format: TimeFormat,
        expires_at: Optional[str],
    ) -> MusterSheet:
        raise NotImplementedError

    def get_by_id(self, sheet_id: str) -> Optional[MusterSheet]:
        raise NotImplementedError

    def list_for_creator(self, creator_id: str) -> Sequence[MusterSheet]:
        raise NotImplementedError

    def update_sheet(
        self,
        *,
        sheet_id: str,
        title: str,
        description: Optional[str],
        required_fields: Sequence[str],
        time_format: TimeFormat,
        expires_at: Optional[str],
    ) -> bool:
        raise NotImplementedError

    def set_active(self, sheet_id: str, *, is_active: bool) -> bool:
        raise NotImplementedError
