"""Create users, properties and tasks tables

Revision ID: 20261019_000001
Revises: None
Create Date: 2026-10-19

Initial schema: agents/superadmins, the properties they own and the
maintenance tasks on those properties. Tasks are removed with their
property (ON DELETE CASCADE).
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261019_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the users, properties and tasks tables."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password', sa.String(length=255), nullable=False),
        sa.Column(
            'role',
            sa.Enum('agente', 'superadmin', name='user_role', create_constraint=True),
            nullable=False,
        ),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'properties',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('price', sa.Float(), nullable=False),
        sa.Column('location', sa.String(length=255), nullable=False),
        sa.Column('bedrooms', sa.Integer(), nullable=False),
        sa.Column('bathrooms', sa.Integer(), nullable=False),
        sa.Column('area', sa.Float(), nullable=False),
        sa.Column('image_urls', sa.JSON(), nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['owner_id'],
            ['users.id'],
            name='fk_properties_owner_id',
            ondelete='NO ACTION',
        ),
    )
    op.create_index('ix_properties_owner_id', 'properties', ['owner_id'])

    op.create_table(
        'tasks',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('is_completed', sa.Boolean(), nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=False),
        sa.Column('assigned_to_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['property_id'],
            ['properties.id'],
            name='fk_tasks_property_id',
            ondelete='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['assigned_to_id'],
            ['users.id'],
            name='fk_tasks_assigned_to_id',
            ondelete='NO ACTION',
        ),
    )
    op.create_index('ix_tasks_property_id', 'tasks', ['property_id'])
    op.create_index('ix_tasks_assigned_to_id', 'tasks', ['assigned_to_id'])


def downgrade() -> None:
    """Drop the tables in reverse dependency order."""
    op.drop_index('ix_tasks_assigned_to_id', table_name='tasks')
    op.drop_index('ix_tasks_property_id', table_name='tasks')
    op.drop_table('tasks')
    op.drop_index('ix_properties_owner_id', table_name='properties')
    op.drop_table('properties')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
