"""orders.seq: insertion number for orders created at the same instant

Revision ID: 8b1d4e6a2c57
Revises: 3f9c2a71d0b4
Create Date: 2026-10-19 15:30:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8b1d4e6a2c57'
down_revision: Union[str, Sequence[str], None] = '3f9c2a71d0b4'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    with op.batch_alter_table("orders") as batch_op:
        batch_op.add_column(sa.Column("seq", sa.Integer(), nullable=False, server_default="0"))
        batch_op.create_index("ix_orders_seq", ["seq"])


def downgrade() -> None:
    """Downgrade schema."""
    with op.batch_alter_table("orders") as batch_op:
        batch_op.drop_index("ix_orders_seq")
        batch_op.drop_column("seq")
