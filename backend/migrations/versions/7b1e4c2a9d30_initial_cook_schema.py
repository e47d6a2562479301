"""initial cook, menu and favorite link tables

Revision ID: 7b1e4c2a9d30
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""
import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = '7b1e4c2a9d30'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'cooks',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('secret', sa.String(length=255), nullable=False),
        sa.Column('avatar', sa.String(length=512), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_cooks')),
        sa.UniqueConstraint('email', name='uq_cooks_email'),
        sa.UniqueConstraint('name', name='uq_cooks_name'),
        sa.UniqueConstraint('secret', name='uq_cooks_secret'),
    )

    op.create_table(
        'menus',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('ingredients', sa.JSON(), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_menus')),
    )

    op.create_table(
        'favorite_links',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('cook_id', sa.String(length=36), nullable=False),
        sa.Column('menu_id', sa.String(length=64), nullable=False),
        sa.Column('added_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['cook_id'], ['cooks.id'], name=op.f('fk_favorite_links_cook_id_cooks'), ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['menu_id'], ['menus.id'], name=op.f('fk_favorite_links_menu_id_menus'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_favorite_links')),
        sa.UniqueConstraint('cook_id', 'menu_id', name='uq_favorite_links_cook_menu'),
    )
    with op.batch_alter_table('favorite_links', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_favorite_links_cook_id'), ['cook_id'], unique=False)


def downgrade():
    with op.batch_alter_table('favorite_links', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_favorite_links_cook_id'))
    op.drop_table('favorite_links')
    op.drop_table('menus')
    op.drop_table('cooks')
