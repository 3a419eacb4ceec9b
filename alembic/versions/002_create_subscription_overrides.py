"""create subscription overrides

Revision ID: 002
Revises: 001
Create Date: 2026-10-18 09:05:00
"""

from alembic import op
import sqlalchemy as sa

revision = '002'
down_revision = '001'
branch_labels = None
depends_on = None


def upgrade() -> None:
    # One row per hidden merchant; hidden_at NULL means visible
    op.create_table(
        'subscription_overrides',
        sa.Column('merchant_key', sa.String(255), primary_key=True),
        sa.Column('hidden_at', sa.DateTime(), nullable=True),
    )


def downgrade() -> None:
    op.drop_table('subscription_overrides')
