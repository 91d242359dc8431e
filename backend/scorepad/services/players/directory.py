import logging
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError

from scorepad.exceptions import ConflictError, InvalidInputError, NotFoundError
from scorepad.models import Game, Player
from scorepad.repositories import GameRepository, PlayerRepository, PlayersSort, ScoreRepository
from scorepad.services.transaction import transactional
from .views import PlayerIdentity, PlayerPage, PlayerView

logger = logging.getLogger(__name__)

NAME_FIELD = 'first_name,last_name'
DUPLICATE_NAME_MESSAGE = 'Player with first_name+last_name already exists'
PLAYER_NOT_FOUND_MESSAGE = 'Player not found'
PLAYER_REFERENCED_MESSAGE = 'Player is referenced in games or scores'


def _score_desc_key(view: PlayerView):
    return (-view.current_total_points, view.last_name, view.first_name)


class PlayerDirectoryService:
    """Lists, creates, renames and deletes players.

    The repositories are injected and must share ``session``; every write
    runs inside one transaction on that session.
    """

    def __init__(self, session, players: PlayerRepository, scores: ScoreRepository, games: GameRepository):
        self.session = session
        self.players = players
        self.scores = scores
        self.games = games

    @classmethod
    def for_session(cls, session):
        return cls(session, PlayerRepository(session), ScoreRepository(session), GameRepository(session))

    # ---- read path ----

    def list_players(self, start_index: int, page_size: int, sort=PlayersSort.NAME) -> PlayerPage:
        """Return one page of players merged with their current score.

        Only the requested slice of players is loaded, and only the latest
        snapshots of those players are looked up. ``total`` counts every
        player regardless of sort or window.
        """
        if start_index is None or start_index < 0:
            raise InvalidInputError('startIndex must be greater than or equal to 0', 'startIndex')
        if page_size is None or page_size < 1:
            raise InvalidInputError('pageSize must be greater than or equal to 1', 'pageSize')
        try:
            sort = PlayersSort(sort)
        except ValueError:
            raise InvalidInputError(f"Invalid value for parameter 'sort': {sort}", 'sort')

        players = self.players.find_page(start_index, page_size, sort)

        latest_scores = {}
        if players:
            for score in self.scores.find_latest_for_players([p.id for p in players]):
                if score.player_id is not None:
                    latest_scores[score.player_id] = score

        now = datetime.now(timezone.utc)
        items = []
        for player in players:
            score = latest_scores.get(player.id)
            items.append(PlayerView(
                id=player.id,
                first_name=player.first_name,
                last_name=player.last_name,
                current_total_points=(score.total_points or 0) if score else 0,
                current_sequence_index=score.sequence_index if score else 0,
                updated_at=score.created_at if score else now,
            ))

        if sort == PlayersSort.SCORE_DESC:
            items.sort(key=_score_desc_key)

        return PlayerPage(
            start_index=start_index,
            page_size=page_size,
            total=self.players.count(),
            sort=sort.value,
            items=items,
        )

    # ---- writes ----

    @transactional
    def create_player(self, first_name: str, last_name: str) -> PlayerIdentity:
        first_name, last_name = first_name.strip(), last_name.strip()

        if self.players.exists_by_name(first_name, last_name):
            raise ConflictError(DUPLICATE_NAME_MESSAGE, NAME_FIELD)

        player = self._save_unique(Player(first_name=first_name, last_name=last_name))
        logger.info(f"[player-create] id={player.id} name={player.first_name} {player.last_name}")
        return PlayerIdentity.from_player(player)

    @transactional
    def update_player(self, player_id, first_name: str, last_name: str) -> PlayerIdentity:
        player = self._get_player(player_id)
        first_name, last_name = first_name.strip(), last_name.strip()

        if self.players.exists_by_name_excluding_id(first_name, last_name, player.id):
            raise ConflictError(DUPLICATE_NAME_MESSAGE, NAME_FIELD)

        player.first_name = first_name
        player.last_name = last_name
        player = self._save_unique(player)
        logger.info(f"[player-update] id={player.id} name={player.first_name} {player.last_name}")
        return PlayerIdentity.from_player(player)

    @transactional
    def delete_player(self, player_id, force: bool = False) -> None:
        """Delete a player.

        Without ``force`` the player must not be referenced by any game slot
        or score snapshot. With ``force`` every reference is cleared first;
        games and snapshots themselves are kept.
        """
        player = self._get_player(player_id)

        if not force:
            if self.games.exists_by_player_id(player.id) or self.scores.exists_by_player_id(player.id):
                raise ConflictError(PLAYER_REFERENCED_MESSAGE)
            self.players.delete(player)
            logger.info(f"[player-delete] id={player.id}")
            return

        # Each slot is cleared on its own: one game may hold the player in several slots
        cleared = {slot: self.games.nullify_slot_references(slot, player.id) for slot in Game.SLOTS}
        cleared['scores'] = self.scores.nullify_player_references(player.id)
        self.players.delete(player)
        logger.info(f"[player-delete] id={player.id} forced cleared={cleared}")

    # ---- helpers ----

    def _get_player(self, player_id) -> Player:
        player = self.players.find_by_id(player_id)
        if player is None:
            raise NotFoundError(PLAYER_NOT_FOUND_MESSAGE, 'id')
        return player

    def _save_unique(self, player: Player) -> Player:
        # A concurrent writer may have taken the name after our check
        try:
            return self.players.save(player)
        except IntegrityError as exc:
            logger.warning(f"[player-conflict] unique index rejected {player.first_name} {player.last_name}: {exc.orig}")
            raise ConflictError(DUPLICATE_NAME_MESSAGE, NAME_FIELD) from exc
