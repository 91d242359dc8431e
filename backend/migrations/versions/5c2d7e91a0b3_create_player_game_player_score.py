"""create player, game and player_score tables

Revision ID: 5c2d7e91a0b3
Revises:
Create Date: 2025-10-06 18:20:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5c2d7e91a0b3'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    existing_tables = set(insp.get_table_names())

    if 'player' not in existing_tables:
        op.create_table(
            'player',
            sa.Column('id', sa.Uuid(), primary_key=True),
            sa.Column('first_name', sa.String(length=50), nullable=False),
            sa.Column('last_name', sa.String(length=50), nullable=False),
        )
        op.create_index('ix_player_first_name', 'player', ['first_name'])
        op.create_index('ix_player_last_name', 'player', ['last_name'])
        op.create_index(
            'player_first_last_name_uq',
            'player',
            [sa.text('lower(first_name)'), sa.text('lower(last_name)')],
            unique=True,
        )

    if 'game' not in existing_tables:
        op.create_table(
            'game',
            sa.Column('id', sa.Uuid(), primary_key=True),
            sa.Column('player1_id', sa.Uuid(), sa.ForeignKey('player.id'), nullable=True),
            sa.Column('player2_id', sa.Uuid(), sa.ForeignKey('player.id'), nullable=True),
            sa.Column('player3_id', sa.Uuid(), sa.ForeignKey('player.id'), nullable=True),
            sa.Column('main_player_id', sa.Uuid(), sa.ForeignKey('player.id'), nullable=True),
            sa.Column('bid_value', sa.Integer(), nullable=True),
            sa.Column('score', sa.Integer(), nullable=True),
            sa.Column('played_at', sa.DateTime(timezone=True), nullable=False),
        )
        op.create_index('ix_game_main_player_id', 'game', ['main_player_id'])
        op.create_index('ix_game_played_at', 'game', ['played_at'])

    if 'player_score' not in existing_tables:
        op.create_table(
            'player_score',
            sa.Column('id', sa.Uuid(), primary_key=True),
            sa.Column('player_id', sa.Uuid(), sa.ForeignKey('player.id'), nullable=True),
            sa.Column('game_id', sa.Uuid(), sa.ForeignKey('game.id'), nullable=False),
            sa.Column('sequence_index', sa.Integer(), nullable=False),
            sa.Column('total_points', sa.Integer(), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        )
        op.create_index('ix_player_score_player_id', 'player_score', ['player_id'])
        op.create_index('ix_player_score_game_id', 'player_score', ['game_id'])
        op.create_index('ix_player_score_sequence_index', 'player_score', ['sequence_index'])


def downgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    existing_tables = set(insp.get_table_names())

    # Children first: player_score -> game -> player
    for table in ('player_score', 'game', 'player'):
        if table in existing_tables:
            op.drop_table(table)
