"""Create users, follows and rps_games tables

Revision ID: 001_create_users_follows_rps
Revises:
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '001_create_users_follows_rps'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid, primary_key=True),
        sa.Column('username', sa.String(50), nullable=False, unique=True, index=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True, index=True),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('verified_email', sa.Boolean, default=False),
        sa.Column('is_operator', sa.Boolean, default=False),
        sa.Column('is_active', sa.Boolean, default=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),

        # Primary progression track
        sa.Column('level', sa.Integer, nullable=False, server_default='1'),
        sa.Column('experience_points', sa.Integer, nullable=False, server_default='0'),
        sa.Column('experience_for_day', sa.Integer, nullable=False, server_default='1000'),

        # Buddy progression track
        sa.Column('buddy_level', sa.Integer, nullable=False, server_default='1', index=True),
        sa.Column('buddy_experience_points', sa.Integer, nullable=False, server_default='0'),
        sa.Column('buddy_experience_for_day', sa.Integer, nullable=False, server_default='2000'),
        sa.Column('progress_version', sa.Integer, nullable=False, server_default='0'),

        # Rock Paper Scissors
        sa.Column('current_play', sa.String(10), server_default='Rock'),
        sa.Column('current_rps_streak', sa.Integer, server_default='0'),
        sa.Column('highest_rps_streak', sa.Integer, server_default='0'),
    )

    op.create_table(
        'follows',
        sa.Column('id', sa.Uuid, primary_key=True),
        sa.Column('requesting_user_id', sa.Uuid, sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('targeted_user_id', sa.Uuid, sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint('requesting_user_id', 'targeted_user_id', name='unique_follow'),
    )

    op.create_table(
        'rps_games',
        sa.Column('id', sa.Uuid, primary_key=True),
        sa.Column('player_id', sa.Uuid, sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('player_choice', sa.String(10), nullable=False),
        sa.Column('opponent_choice', sa.String(10), nullable=False),
        sa.Column('outcome', sa.String(10), nullable=False),
        sa.Column('winner_name', sa.String(50)),
        sa.Column('winner_choice', sa.String(10)),
        sa.Column('winner_streak', sa.Integer, server_default='0'),
        sa.Column('loser_name', sa.String(50)),
        sa.Column('loser_choice', sa.String(10)),
        sa.Column('xp_awarded', sa.Integer, server_default='0'),
        sa.Column('game_over', sa.Boolean, server_default=sa.true()),
        sa.Column('played_at', sa.DateTime(timezone=True), server_default=sa.func.now(), index=True),
    )


def downgrade() -> None:
    op.drop_table('rps_games')
    op.drop_table('follows')
    op.drop_table('users')
