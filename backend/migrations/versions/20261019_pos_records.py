"""pos records key-value store

Revision ID: 20261019_pos_records
Revises:
Create Date: 2026-10-19 00:00:00.000000

Creates the single table backing the POS store:
- pos_records: one row per named collection (products, cart, sales,
  activeShift, shiftHistory, idSequence, initialized), JSON value,
  version_id for optimistic locking
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '20261019_pos_records'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'pos_records',
        sa.Column('key', sa.String(length=64), nullable=False),
        sa.Column('value_json', sa.JSON(), nullable=True),
        sa.Column('version_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.PrimaryKeyConstraint('key'),
    )


def downgrade():
    op.drop_table('pos_records')
