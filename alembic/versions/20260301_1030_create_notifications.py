"""create notifications table

Revision ID: 20260301_1030_create_notifications
Revises: 20260301_1020_create_routes
Create Date: 2026-03-01 10:30:00
"""
from alembic import op
import sqlalchemy as sa

revision = '20260301_1030_create_notifications'
down_revision = '20260301_1020_create_routes'
branch_labels = None
depends_on = None

def upgrade() -> None:
    op.create_table(
        'notifications',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=False),
        sa.Column('user_id', sa.BigInteger(), nullable=False),
        sa.Column('route_id', sa.Integer(), nullable=True),
        sa.Column('type', sa.String(32), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_notifications_user_id', 'notifications', ['user_id'])
    op.create_index('ix_notifications_route_id', 'notifications', ['route_id'])

def downgrade() -> None:
    op.drop_index('ix_notifications_route_id', table_name='notifications')
    op.drop_index('ix_notifications_user_id', table_name='notifications')
    op.drop_table('notifications')
