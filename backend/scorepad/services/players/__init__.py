"""Player directory services: listing, uniqueness and deletion.

This package holds the domain logic that the players blueprint and the CLI
call into, keeping HTTP parsing separate from the directory rules.
"""

from .directory import PlayerDirectoryService
from .views import PlayerIdentity, PlayerPage, PlayerView
from scorepad.repositories import PlayersSort

__all__ = [
    'PlayerDirectoryService',
    'PlayerIdentity',
    'PlayerPage',
    'PlayerView',
    'PlayersSort',
]
