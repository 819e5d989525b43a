"""initial schema: adjustment_type, adjustment, time_entry

Revision ID: 4f1c2a7b9d30
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4f1c2a7b9d30'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

BigId = sa.BigInteger().with_variant(sa.Integer(), "sqlite")


def upgrade() -> None:
    op.create_table(
        'adjustment_type',
        sa.Column('id', BigId, primary_key=True, autoincrement=True),
        sa.Column('description', sa.String(length=255), nullable=False),
        sa.Column('adjustment', sa.SmallInteger(), nullable=False),
    )
    op.create_table(
        'adjustment',
        sa.Column('id', BigId, primary_key=True, autoincrement=True),
        sa.Column(
            'adjustment_type_id',
            BigId,
            sa.ForeignKey('adjustment_type.id', ondelete='RESTRICT'),
            nullable=False,
        ),
        sa.Column('created', sa.DateTime(), nullable=False),
        sa.Column('comment', sa.String(length=255), nullable=True),
    )
    op.create_index('ix_adjustment_adjustment_type_id', 'adjustment', ['adjustment_type_id'])
    op.create_index('ix_adjustment_created', 'adjustment', ['created'])
    op.create_table(
        'time_entry',
        sa.Column('id', BigId, primary_key=True, autoincrement=True),
        sa.Column('time', sa.Integer(), nullable=False),
        sa.Column('created', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_time_entry_created', 'time_entry', ['created'])


def downgrade() -> None:
    op.drop_index('ix_time_entry_created', table_name='time_entry')
    op.drop_table('time_entry')
    op.drop_index('ix_adjustment_created', table_name='adjustment')
    op.drop_index('ix_adjustment_adjustment_type_id', table_name='adjustment')
    op.drop_table('adjustment')
    op.drop_table('adjustment_type')
