"""create strings table

Revision ID: 20251020_000001
Revises: 
Create Date: 2025-10-20 00:00:01.000000

"""
from typing import Sequence, Union

from alembic import op  # type: ignore[attr-defined]
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '20251020_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'strings',
        sa.Column('id', sa.String(64), primary_key=True),
        sa.Column('value', sa.Text(), nullable=False),
        sa.Column('length', sa.Integer(), nullable=False),
        sa.Column('is_palindrome', sa.Boolean(), nullable=False),
        sa.Column('unique_characters', sa.Integer(), nullable=False),
        sa.Column('word_count', sa.Integer(), nullable=False),
        sa.Column('character_frequency_map', sa.JSON(), nullable=False),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text('CURRENT_TIMESTAMP'),
        ),
    )
    op.create_index(op.f('ix_strings_length'), 'strings', ['length'], unique=False)
    op.create_index(op.f('ix_strings_is_palindrome'), 'strings', ['is_palindrome'], unique=False)
    op.create_index(op.f('ix_strings_word_count'), 'strings', ['word_count'], unique=False)
    op.create_index(op.f('ix_strings_created_at'), 'strings', ['created_at'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_strings_created_at'), table_name='strings')
    op.drop_index(op.f('ix_strings_word_count'), table_name='strings')
    op.drop_index(op.f('ix_strings_is_palindrome'), table_name='strings')
    op.drop_index(op.f('ix_strings_length'), table_name='strings')
    op.drop_table('strings')
