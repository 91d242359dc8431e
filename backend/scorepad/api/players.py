from flask import Blueprint, jsonify, request, current_app, url_for
from scorepad import db
from scorepad.exceptions import InvalidInputError, NotFoundError, ConflictError
from scorepad.services.players import PlayerDirectoryService, PlayersSort
import uuid


players = Blueprint('players', __name__)

_TRUE_VALUES = ('true', '1', 'yes', 'on')
_FALSE_VALUES = ('false', '0', 'no', 'off')


def _directory() -> PlayerDirectoryService:
    return PlayerDirectoryService.for_session(db.session)


def _int_arg(name: str, default: int) -> int:
    raw = request.args.get(name)
    if raw is None or raw == '':
        return default
    try:
        return int(raw)
    except ValueError:
        raise InvalidInputError(f"Invalid value for parameter '{name}'", name)


def _bool_arg(name: str, default: bool = False) -> bool:
    raw = request.args.get(name)
    if raw is None or raw == '':
        return default
    if raw.lower() in _TRUE_VALUES:
        return True
    if raw.lower() in _FALSE_VALUES:
        return False
    raise InvalidInputError(f"Invalid value for parameter '{name}'", name)


def _player_id(raw: str) -> uuid.UUID:
    try:
        return uuid.UUID(raw)
    except ValueError:
        raise InvalidInputError("Invalid value for parameter 'id'", 'id')


def _player_names():
    """Validate the upsert body and return (first_name, last_name)."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidInputError('Request body must be a JSON object')
    max_length = int(current_app.config.get('PLAYER_NAME_MAX_LENGTH', 50))
    names = []
    for field in ('first_name', 'last_name'):
        value = data.get(field)
        if not isinstance(value, str) or not value.strip():
            raise InvalidInputError(f'{field} is required', field)
        if len(value) > max_length:
            raise InvalidInputError(f'{field} must not exceed {max_length} characters', field)
        names.append(value)
    return names[0], names[1]


@players.errorhandler(NotFoundError)
def handle_not_found(exc):
    return jsonify(exc.to_dict()), 404


@players.errorhandler(ConflictError)
def handle_conflict(exc):
    return jsonify(exc.to_dict()), 409


@players.errorhandler(InvalidInputError)
def handle_invalid_input(exc):
    return jsonify(exc.to_dict()), 400


@players.route('', methods=['GET'])
def list_players():
    sort = request.args.get('sort') or PlayersSort.NAME.value
    if sort not in PlayersSort.__members__:
        raise InvalidInputError("Invalid value for parameter 'sort'", 'sort')
    start_index = _int_arg('startIndex', 0)
    page_size = _int_arg('pageSize', int(current_app.config.get('DEFAULT_PAGE_SIZE', 50)))
    if start_index < 0:
        raise InvalidInputError('startIndex must be greater than or equal to 0', 'startIndex')
    max_page_size = int(current_app.config.get('MAX_PAGE_SIZE', 200))
    if page_size < 1 or page_size > max_page_size:
        raise InvalidInputError(f'pageSize must be between 1 and {max_page_size}', 'pageSize')

    page = _directory().list_players(start_index, page_size, PlayersSort[sort])
    return jsonify(page.to_dict())


@players.route('', methods=['POST'])
def create_player():
    first_name, last_name = _player_names()
    player = _directory().create_player(first_name, last_name)
    current_app.logger.info(f"[api] created player id={player.id}")
    response = jsonify(player.to_dict())
    response.status_code = 201
    response.headers['Location'] = url_for('players.update_player', player_id=str(player.id))
    return response


@players.route('/<string:player_id>', methods=['PUT'])
def update_player(player_id):
    pid = _player_id(player_id)
    first_name, last_name = _player_names()
    player = _directory().update_player(pid, first_name, last_name)
    return jsonify(player.to_dict())


@players.route('/<string:player_id>', methods=['DELETE'])
def delete_player(player_id):
    pid = _player_id(player_id)
    force = _bool_arg('forceDeletion', False)
    _directory().delete_player(pid, force=force)
    current_app.logger.info(f"[api] deleted player id={pid} force={force}")
    return '', 204
