"""Data access for players, games and score snapshots.

Each repository wraps a SQLAlchemy session handed in by the caller; none of
them commit. Transaction boundaries belong to the service layer.
"""
from enum import Enum
from typing import Iterable, List, Optional
import logging
import uuid

from sqlalchemy import and_, func, or_

from scorepad.models import Game, Player, PlayerScore

logger = logging.getLogger(__name__)


class PlayersSort(str, Enum):
    NAME = 'NAME'
    SCORE_DESC = 'SCORE_DESC'


def latest_sequence_subquery(session, player_ids: Optional[Iterable[uuid.UUID]] = None):
    """(player_id, max_seq) for every player that owns at least one snapshot."""
    query = session.query(
        PlayerScore.player_id.label('player_id'),
        func.max(PlayerScore.sequence_index).label('max_seq'),
    ).filter(PlayerScore.player_id.isnot(None))
    if player_ids is not None:
        query = query.filter(PlayerScore.player_id.in_(list(player_ids)))
    return query.group_by(PlayerScore.player_id).subquery('latest_seq')


def current_points_subquery(session):
    """(player_id, total_points) of each player's latest snapshot."""
    latest = latest_sequence_subquery(session)
    return (
        session.query(
            PlayerScore.player_id.label('player_id'),
            # max() collapses the unlikely case of two snapshots sharing the top index
            func.max(PlayerScore.total_points).label('total_points'),
        )
        .join(latest, and_(
            PlayerScore.player_id == latest.c.player_id,
            PlayerScore.sequence_index == latest.c.max_seq,
        ))
        .group_by(PlayerScore.player_id)
        .subquery('current_points')
    )


class PlayerRepository:
    def __init__(self, session):
        self.session = session

    def _name_match(self, first_name: str, last_name: str):
        return and_(
            func.lower(Player.first_name) == func.lower(first_name),
            func.lower(Player.last_name) == func.lower(last_name),
        )

    def exists_by_name(self, first_name: str, last_name: str) -> bool:
        query = self.session.query(Player.id).filter(self._name_match(first_name, last_name))
        return self.session.query(query.exists()).scalar()

    def exists_by_name_excluding_id(self, first_name: str, last_name: str, player_id: uuid.UUID) -> bool:
        query = self.session.query(Player.id).filter(
            self._name_match(first_name, last_name),
            Player.id != player_id,
        )
        return self.session.query(query.exists()).scalar()

    def find_by_id(self, player_id: uuid.UUID) -> Optional[Player]:
        return self.session.get(Player, player_id)

    def save(self, player: Player) -> Player:
        self.session.add(player)
        self.session.flush()
        return player

    def delete(self, player: Player) -> None:
        self.session.delete(player)
        self.session.flush()

    def count(self) -> int:
        return self.session.query(func.count(Player.id)).scalar() or 0

    def find_page(self, offset: int, limit: int, sort: PlayersSort) -> List[Player]:
        query = self.session.query(Player)
        if sort == PlayersSort.SCORE_DESC:
            current = current_points_subquery(self.session)
            query = query.outerjoin(current, current.c.player_id == Player.id).order_by(
                func.coalesce(current.c.total_points, 0).desc(),
            )
        query = query.order_by(Player.last_name.asc(), Player.first_name.asc(), Player.id.asc())
        players = query.offset(offset).limit(limit).all()
        logger.debug(f"[player-page] sort={sort.value} offset={offset} limit={limit} rows={len(players)}")
        return players


class ScoreRepository:
    def __init__(self, session):
        self.session = session

    def find_latest_for_players(self, player_ids: Iterable[uuid.UUID]) -> List[PlayerScore]:
        player_ids = list(player_ids)
        if not player_ids:
            return []
        latest = latest_sequence_subquery(self.session, player_ids)
        return (
            self.session.query(PlayerScore)
            .join(latest, and_(
                PlayerScore.player_id == latest.c.player_id,
                PlayerScore.sequence_index == latest.c.max_seq,
            ))
            .all()
        )

    def exists_by_player_id(self, player_id: uuid.UUID) -> bool:
        query = self.session.query(PlayerScore.id).filter(PlayerScore.player_id == player_id)
        return self.session.query(query.exists()).scalar()

    def nullify_player_references(self, player_id: uuid.UUID) -> int:
        return (
            self.session.query(PlayerScore)
            .filter(PlayerScore.player_id == player_id)
            .update({PlayerScore.player_id: None}, synchronize_session='fetch')
        )


class GameRepository:
    def __init__(self, session):
        self.session = session

    def exists_by_player_id(self, player_id: uuid.UUID) -> bool:
        query = self.session.query(Game.id).filter(or_(
            *(Game.slot_column(slot) == player_id for slot in Game.SLOTS)
        ))
        return self.session.query(query.exists()).scalar()

    def nullify_slot_references(self, slot: str, player_id: uuid.UUID) -> int:
        column = Game.slot_column(slot)
        return (
            self.session.query(Game)
            .filter(column == player_id)
            .update({column: None}, synchronize_session='fetch')
        )

    def nullify_player1_references(self, player_id: uuid.UUID) -> int:
        return self.nullify_slot_references('player1', player_id)

    def nullify_player2_references(self, player_id: uuid.UUID) -> int:
        return self.nullify_slot_references('player2', player_id)

    def nullify_player3_references(self, player_id: uuid.UUID) -> int:
        return self.nullify_slot_references('player3', player_id)

    def nullify_main_player_references(self, player_id: uuid.UUID) -> int:
        return self.nullify_slot_references('main_player', player_id)
