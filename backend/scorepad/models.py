from scorepad import db
from datetime import datetime, timezone
import uuid


def utcnow():
    return datetime.now(timezone.utc)


class Player(db.Model):
    __tablename__ = 'player'
    id = db.Column(db.Uuid, primary_key=True, default=uuid.uuid4)
    first_name = db.Column(db.String(50), nullable=False, index=True)
    last_name = db.Column(db.String(50), nullable=False, index=True)

    def to_dict(self):
        return {
            'id': str(self.id),
            'first_name': self.first_name,
            'last_name': self.last_name,
        }

    def __repr__(self):
        return f'<Player {self.id} {self.first_name} {self.last_name}>'


# Case-insensitive identity: two players may not share first+last name ignoring case
db.Index(
    'player_first_last_name_uq',
    db.func.lower(Player.first_name),
    db.func.lower(Player.last_name),
    unique=True,
)


class Game(db.Model):
    __tablename__ = 'game'
    # Seat slots plus the declarer role; a player may occupy several of them
    SLOTS = ('player1', 'player2', 'player3', 'main_player')

    id = db.Column(db.Uuid, primary_key=True, default=uuid.uuid4)
    player1_id = db.Column(db.Uuid, db.ForeignKey('player.id'), nullable=True)
    player2_id = db.Column(db.Uuid, db.ForeignKey('player.id'), nullable=True)
    player3_id = db.Column(db.Uuid, db.ForeignKey('player.id'), nullable=True)
    main_player_id = db.Column(db.Uuid, db.ForeignKey('player.id'), nullable=True, index=True)
    bid_value = db.Column(db.Integer, nullable=True)
    score = db.Column(db.Integer, nullable=True)
    played_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, index=True)

    player1 = db.relationship('Player', foreign_keys=[player1_id])
    player2 = db.relationship('Player', foreign_keys=[player2_id])
    player3 = db.relationship('Player', foreign_keys=[player3_id])
    main_player = db.relationship('Player', foreign_keys=[main_player_id])

    @classmethod
    def slot_column(cls, slot):
        if slot not in cls.SLOTS:
            raise ValueError(f'Unknown game slot: {slot}')
        return getattr(cls, f'{slot}_id')

    def to_dict(self):
        return {
            'id': str(self.id),
            'player1_id': str(self.player1_id) if self.player1_id else None,
            'player2_id': str(self.player2_id) if self.player2_id else None,
            'player3_id': str(self.player3_id) if self.player3_id else None,
            'main_player_id': str(self.main_player_id) if self.main_player_id else None,
            'bid_value': self.bid_value,
            'score': self.score,
            'played_at': self.played_at.isoformat() if self.played_at else None,
        }


class PlayerScore(db.Model):
    """Running point total of one player after a game.

    ``sequence_index`` grows per player; the highest index is the current score.
    """
    __tablename__ = 'player_score'
    id = db.Column(db.Uuid, primary_key=True, default=uuid.uuid4)
    player_id = db.Column(db.Uuid, db.ForeignKey('player.id'), nullable=True, index=True)
    game_id = db.Column(db.Uuid, db.ForeignKey('game.id'), nullable=False, index=True)
    sequence_index = db.Column(db.Integer, nullable=False, index=True)
    total_points = db.Column(db.Integer, nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    player = db.relationship('Player', foreign_keys=[player_id])
    game = db.relationship('Game', foreign_keys=[game_id])

    def to_dict(self):
        return {
            'id': str(self.id),
            'player_id': str(self.player_id) if self.player_id else None,
            'game_id': str(self.game_id),
            'sequence_index': self.sequence_index,
            'total_points': self.total_points,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }
