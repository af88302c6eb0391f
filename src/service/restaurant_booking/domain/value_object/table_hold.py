from datetime import datetime
from typing import Any, Optional

import attrs


@attrs.frozen
class TableHold:
    """Short-lived exclusive claim on a table while a diner is picking a slot"""

    table_id: str
    restaurant_id: str
    section_id: str
    holder_user_id: str
    expires_at: datetime
    session_id: Optional[str] = None

    def is_active(self, *, now: datetime) -> bool:
        return self.expires_at > now

    def is_held_by(self, user_id: str) -> bool:
        return self.holder_user_id == user_id

    def to_dict(self) -> dict[str, Any]:
        return {
            'table_id': self.table_id,
            'restaurant_id': self.restaurant_id,
            'section_id': self.section_id,
            'holder_user_id': self.holder_user_id,
            'session_id': self.session_id,
            'expires_at': self.expires_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'TableHold':
        return cls(
            table_id=data['table_id'],
            restaurant_id=data['restaurant_id'],
            section_id=data['section_id'],
            holder_user_id=data['holder_user_id'],
            session_id=data.get('session_id'),
            expires_at=datetime.fromisoformat(data['expires_at']),
        )


@attrs.frozen
class TableSelectionResult:
    success: bool
    table_id: str
    selected_by: Optional[str] = None
    expires_at: Optional[datetime] = None
    message: Optional[str] = None

    @classmethod
    def held(cls, hold: TableHold) -> 'TableSelectionResult':
        return cls(
            success=True,
            table_id=hold.table_id,
            selected_by=hold.holder_user_id,
            expires_at=hold.expires_at,
        )

    @classmethod
    def rejected(cls, *, table_id: str, message: str) -> 'TableSelectionResult':
        return cls(success=False, table_id=table_id, message=message)
