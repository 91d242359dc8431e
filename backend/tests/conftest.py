import os
import sys
from datetime import datetime, timedelta, timezone
import pytest

# Ensure the backend root (containing the `scorepad` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from scorepad import create_app, db


class TestConfig:
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    CORS_ORIGINS = ['http://localhost:4200']
    LOG_LEVEL = 'DEBUG'
    DEFAULT_PAGE_SIZE = 50
    MAX_PAGE_SIZE = 200
    PLAYER_NAME_MAX_LENGTH = 50


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import scorepad.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def directory(flask_app):
    from scorepad.services.players import PlayerDirectoryService
    return PlayerDirectoryService.for_session(db.session)


@pytest.fixture()
def make_player(flask_app):
    from scorepad.models import Player

    def _make(first_name, last_name):
        player = Player(first_name=first_name, last_name=last_name)
        db.session.add(player)
        db.session.commit()
        return player

    return _make


@pytest.fixture()
def make_game(flask_app):
    from scorepad.models import Game

    def _make(**slots):
        game = Game(played_at=datetime.now(timezone.utc), **slots)
        db.session.add(game)
        db.session.commit()
        return game

    return _make


@pytest.fixture()
def make_score(flask_app, make_game):
    from scorepad.models import PlayerScore

    def _make(player, total_points, sequence_index=0, game=None, created_at=None):
        game = game or make_game()
        score = PlayerScore(
            player_id=player.id if player is not None else None,
            game_id=game.id,
            sequence_index=sequence_index,
            total_points=total_points,
            created_at=created_at or datetime.now(timezone.utc) + timedelta(seconds=sequence_index),
        )
        db.session.add(score)
        db.session.commit()
        return score

    return _make
