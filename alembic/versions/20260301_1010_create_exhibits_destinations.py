"""create exhibits and destinations tables

Revision ID: 20260301_1010_create_exhibits_destinations
Revises: 20260301_1000_create_users
Create Date: 2026-03-01 10:10:00
"""
from alembic import op
import sqlalchemy as sa

revision = '20260301_1010_create_exhibits_destinations'
down_revision = '20260301_1000_create_users'
branch_labels = None
depends_on = None

def upgrade() -> None:
    op.create_table(
        'exhibits',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('title', sa.String(255), nullable=True),
        sa.Column('artist', sa.String(255), nullable=True),
        sa.Column('category', sa.JSON(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('location', sa.String(255), nullable=True),
        sa.Column('coordinates', sa.JSON(), nullable=True),
        sa.Column('status', sa.String(32), nullable=False, server_default='open'),
        sa.Column('ratings', sa.JSON(), nullable=False),
        sa.Column('average_rating', sa.Float(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_table(
        'destinations',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('type', sa.String(32), nullable=False),
        sa.Column('coordinates', sa.JSON(), nullable=False),
        sa.Column('map_id', sa.Integer(), nullable=True),
        sa.Column('status', sa.String(32), nullable=False, server_default='available'),
        sa.Column('crowd_level', sa.String(16), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

def downgrade() -> None:
    op.drop_table('destinations')
    op.drop_table('exhibits')
