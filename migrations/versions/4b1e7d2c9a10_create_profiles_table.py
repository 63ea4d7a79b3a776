"""create_profiles_table

Revision ID: 4b1e7d2c9a10
Revises:
Create Date: 2026-10-18 09:12:44.310552

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '4b1e7d2c9a10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create profiles table."""
    op.create_table('profiles',
        sa.Column('id', sa.String(length=128), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('handle', sa.String(length=256), nullable=False),
        sa.Column('activation_code', sa.String(length=64), nullable=False),
        sa.Column('source_ip', sa.String(length=64), nullable=True),
        sa.Column('source_system', sa.String(length=50), nullable=True),
        sa.Column('role', sa.String(length=20), nullable=False, server_default='USER'),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='UNCONFIRMED'),
        sa.Column('badges', postgresql.JSONB(astext_type=sa.Text()), nullable=False, server_default='[]'),
        sa.Column('bio', postgresql.JSONB(astext_type=sa.Text()), nullable=False, server_default='{}'),
        sa.Column('data', postgresql.JSONB(astext_type=sa.Text()), nullable=False, server_default='{}'),
        sa.CheckConstraint("role IN ('USER', 'ADMIN')", name='ck_profiles_role'),
        sa.CheckConstraint("status IN ('UNCONFIRMED', 'CONFIRMED', 'DISABLED')", name='ck_profiles_status'),
        sa.PrimaryKeyConstraint('id'),
    )
    # Not unique: activation codes are checked for collisions before insert
    op.create_index('ix_profiles_activation_code', 'profiles', ['activation_code'], unique=False)


def downgrade() -> None:
    """Drop profiles table."""
    op.drop_index('ix_profiles_activation_code', table_name='profiles')
    op.drop_table('profiles')
