"""init_db_schema

Revision ID: 0001
Revises:
Create Date: 2024-05-20

Schema:
- movie: Movie catalog (name unique)
- schedule: Showtimes, cascade-deleted with their movie
- sheet: Seats of each screen
- reservation: Seat bookings, cascade-deleted with their schedule

Note: uq_reservation_schedule_sheet_date guarantees at most one reservation
per (schedule_id, sheet_id, date) even under concurrent inserts.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create all tables with final schema."""

    op.create_table(
        'movie',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=160), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('image_url', sa.String(length=150), nullable=False),
        sa.Column('is_showing', sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )

    op.create_table(
        'schedule',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('movie_id', sa.Integer(), nullable=False),
        sa.Column('screen_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['movie_id'], ['movie.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_schedule_movie_id'), 'schedule', ['movie_id'], unique=False)
    op.create_index(op.f('ix_schedule_screen_id'), 'schedule', ['screen_id'], unique=False)

    op.create_table(
        'sheet',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('screen_id', sa.Integer(), nullable=False),
        sa.Column('column', sa.Integer(), nullable=False),
        sa.Column('row', sa.String(length=1), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('screen_id', 'row', 'column', name='uq_sheet_position'),
    )
    op.create_index(op.f('ix_sheet_screen_id'), 'sheet', ['screen_id'], unique=False)

    op.create_table(
        'reservation',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('schedule_id', sa.Integer(), nullable=False),
        sa.Column('sheet_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('now()'),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(['schedule_id'], ['schedule.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['sheet_id'], ['sheet.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_unique_constraint(
        'uq_reservation_schedule_sheet_date',
        'reservation',
        ['schedule_id', 'sheet_id', 'date'],
    )
    op.create_index(op.f('ix_reservation_sheet_id'), 'reservation', ['sheet_id'], unique=False)
    op.create_index(op.f('ix_reservation_user_id'), 'reservation', ['user_id'], unique=False)


def downgrade() -> None:
    """Drop all tables."""
    op.drop_index(op.f('ix_reservation_user_id'), table_name='reservation')
    op.drop_index(op.f('ix_reservation_sheet_id'), table_name='reservation')
    op.drop_constraint('uq_reservation_schedule_sheet_date', 'reservation', type_='unique')
    op.drop_table('reservation')

    op.drop_index(op.f('ix_sheet_screen_id'), table_name='sheet')
    op.drop_table('sheet')

    op.drop_index(op.f('ix_schedule_screen_id'), table_name='schedule')
    op.drop_index(op.f('ix_schedule_movie_id'), table_name='schedule')
    op.drop_table('schedule')

    op.drop_table('movie')
