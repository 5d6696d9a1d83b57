"""create_users_table

Revision ID: 4b7e91c2d05a
Revises:
Create Date: 2026-03-02 10:41:07.512334

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4b7e91c2d05a'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the users table holding one profile per auth user."""
    op.create_table('users',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('name', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('gitam_email', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('mobile_number', sa.String(length=20), nullable=False, server_default=''),
        sa.Column('branch', sa.String(length=100), nullable=False, server_default=''),
        sa.Column('year', sa.String(length=10), nullable=False, server_default=''),
        sa.Column('registration_number', sa.String(length=50), nullable=False, server_default=''),
        sa.Column('role', sa.String(length=10), nullable=False, server_default='user'),
        sa.Column('access_strength', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('access_mind', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('access_chance', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('current_game', sa.String(length=20), nullable=True),
        sa.Column('game_selected_at', sa.DateTime(), nullable=True),
        sa.Column('last_active', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint("role IN ('user', 'admin')", name='ck_users_role'),
        sa.CheckConstraint(
            "current_game IS NULL OR current_game IN ('strength', 'mind', 'chance')",
            name='ck_users_current_game',
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_last_active', 'users', ['last_active'], unique=False)

    # The API connects with the service role; block direct client access.
    op.execute("ALTER TABLE users ENABLE ROW LEVEL SECURITY;")


def downgrade() -> None:
    """Drop the users table."""
    op.drop_index('ix_users_last_active', table_name='users')
    op.drop_table('users')
