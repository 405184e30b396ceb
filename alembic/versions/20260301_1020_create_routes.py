"""create routes table

Revision ID: 20260301_1020_create_routes
Revises: 20260301_1010_create_exhibits_destinations
Create Date: 2026-03-01 10:20:00
"""
from alembic import op
import sqlalchemy as sa

revision = '20260301_1020_create_routes'
down_revision = '20260301_1010_create_exhibits_destinations'
branch_labels = None
depends_on = None

def upgrade() -> None:
    op.create_table(
        'routes',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=False),
        sa.Column('user_id', sa.BigInteger(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('destination_id', sa.Integer(), nullable=True),
        sa.Column('start_coordinates', sa.JSON(), nullable=False),
        sa.Column('end_coordinates', sa.JSON(), nullable=False),
        sa.Column('path', sa.JSON(), nullable=False),
        sa.Column('instructions', sa.JSON(), nullable=False),
        sa.Column('stops', sa.JSON(), nullable=False),
        sa.Column('distance', sa.Float(), nullable=False),
        sa.Column('estimated_time', sa.Integer(), nullable=False),
        sa.Column('arrival_time', sa.String(16), nullable=True),
        sa.Column('calculation_time', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_personalized', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('map_url', sa.String(255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_routes_user_id', 'routes', ['user_id'])

def downgrade() -> None:
    op.drop_index('ix_routes_user_id', table_name='routes')
    op.drop_table('routes')
