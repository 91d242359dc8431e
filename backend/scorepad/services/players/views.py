"""Read models returned by the player directory."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List
import uuid


@dataclass
class PlayerIdentity:
    id: uuid.UUID
    first_name: str
    last_name: str

    @classmethod
    def from_player(cls, player):
        return cls(id=player.id, first_name=player.first_name, last_name=player.last_name)

    def to_dict(self):
        return {
            'id': str(self.id),
            'first_name': self.first_name,
            'last_name': self.last_name,
        }


@dataclass
class PlayerView:
    """A player together with its current score snapshot."""
    id: uuid.UUID
    first_name: str
    last_name: str
    current_total_points: int = 0
    current_sequence_index: int = 0
    updated_at: datetime = None

    def to_dict(self):
        return {
            'id': str(self.id),
            'first_name': self.first_name,
            'last_name': self.last_name,
            'current_total_points': self.current_total_points,
            'current_sequence_index': self.current_sequence_index,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }


@dataclass
class PlayerPage:
    start_index: int
    page_size: int
    total: int
    sort: str
    items: List[PlayerView] = field(default_factory=list)

    def to_dict(self):
        return {
            'items': [item.to_dict() for item in self.items],
            'paging': {
                'startIndex': self.start_index,
                'pageSize': self.page_size,
                'total': self.total,
            },
            'sort': self.sort,
        }
