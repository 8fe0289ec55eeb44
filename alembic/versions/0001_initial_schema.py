"""initial_schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB


# revision identifiers, used by Alembic.
revision: str = '0001_initial_schema'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _json():
    return sa.JSON().with_variant(JSONB(), 'postgresql')


def upgrade() -> None:
    """Create users, training plans, workout sessions, media and blob tables."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('phone_number', sa.String(length=32), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('role', sa.String(length=32), nullable=False),
        sa.Column('trainer_id', sa.Integer(), nullable=True),
        sa.Column('training_plan_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['trainer_id'], ['users.id'], name='fk_users_trainer_id'),
        sa.PrimaryKeyConstraint('id', name='pk_users'),
    )
    op.create_index('ix_users_phone_number', 'users', ['phone_number'], unique=True)
    op.create_index('ix_users_trainer_id', 'users', ['trainer_id'])
    op.create_index('ix_users_training_plan_id', 'users', ['training_plan_id'])

    op.create_table(
        'training_plans',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('days', _json(), nullable=False),
        sa.Column('duration_weeks', sa.Integer(), nullable=False),
        sa.Column('created_by', sa.Integer(), nullable=False),
        sa.Column('is_copy', sa.Boolean(), nullable=False),
        sa.Column('is_assigned', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['created_by'], ['users.id'], name='fk_training_plans_created_by'),
        sa.PrimaryKeyConstraint('id', name='pk_training_plans'),
    )
    op.create_index('ix_training_plans_created_by', 'training_plans', ['created_by'])
    op.create_foreign_key(
        'fk_users_training_plan_id', 'users', 'training_plans', ['training_plan_id'], ['id']
    )

    op.create_table(
        'workout_sessions',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('training_plan_id', sa.Integer(), nullable=True),
        sa.Column('day_of_week', sa.String(length=32), nullable=False),
        sa.Column('status', sa.String(length=32), nullable=False),
        sa.Column('start_time', sa.DateTime(), nullable=False),
        sa.Column('end_time', sa.DateTime(), nullable=True),
        sa.Column('exercises', _json(), nullable=False),
        sa.Column('total_time', sa.Float(), nullable=False),
        sa.Column('total_calories_burned', sa.Float(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE', name='fk_workout_sessions_user_id'),
        sa.ForeignKeyConstraint(
            ['training_plan_id'], ['training_plans.id'], ondelete='SET NULL', name='fk_workout_sessions_training_plan_id'
        ),
        sa.PrimaryKeyConstraint('id', name='pk_workout_sessions'),
    )
    op.create_index('ix_workout_sessions_user_day_start', 'workout_sessions', ['user_id', 'day_of_week', 'start_time'])
    op.create_index('ix_workout_sessions_user_status', 'workout_sessions', ['user_id', 'status'])
    op.create_index('ix_workout_sessions_user_start', 'workout_sessions', ['user_id', 'start_time'])

    op.create_table(
        'diet_logs',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('meal_type', sa.String(length=32), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('calories', sa.Float(), nullable=True),
        sa.Column('image_id', sa.String(length=64), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE', name='fk_diet_logs_user_id'),
        sa.PrimaryKeyConstraint('id', name='pk_diet_logs'),
    )
    op.create_index('ix_diet_logs_user_id', 'diet_logs', ['user_id'])
    op.create_index('ix_diet_logs_image_id', 'diet_logs', ['image_id'])

    op.create_table(
        'gallery_items',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('img_url', sa.String(length=1024), nullable=False),
        sa.Column('storage_id', sa.String(length=64), nullable=True),
        sa.Column('status', sa.String(length=32), nullable=False),
        sa.Column('access', sa.String(length=32), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE', name='fk_gallery_items_user_id'),
        sa.PrimaryKeyConstraint('id', name='pk_gallery_items'),
    )
    op.create_index('ix_gallery_items_user_id', 'gallery_items', ['user_id'])
    op.create_index('ix_gallery_items_storage_id', 'gallery_items', ['storage_id'])

    op.create_table(
        'success_stories',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('slug', sa.String(length=200), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('image_storage_id', sa.String(length=64), nullable=True),
        sa.Column('image_url', sa.String(length=1024), nullable=True),
        sa.Column('paragraph', sa.Text(), nullable=False),
        sa.Column('points', _json(), nullable=False),
        sa.Column('status', sa.String(length=32), nullable=False),
        sa.Column('order', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_success_stories'),
        sa.UniqueConstraint('slug', name='uq_success_stories_slug'),
    )
    op.create_index('ix_success_stories_image_storage_id', 'success_stories', ['image_storage_id'])

    op.create_table(
        'transformation_images',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(length=200), nullable=True),
        sa.Column('image_storage_id', sa.String(length=64), nullable=True),
        sa.Column('image_url', sa.String(length=1024), nullable=False),
        sa.Column('order', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=32), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_transformation_images'),
    )
    op.create_index('ix_transformation_images_image_storage_id', 'transformation_images', ['image_storage_id'])

    op.create_table(
        'storage_blobs',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('content_type', sa.String(length=128), nullable=True),
        sa.Column('size', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_storage_blobs'),
    )
    op.create_index('ix_storage_blobs_created_at', 'storage_blobs', ['created_at'])


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table('storage_blobs')
    op.drop_table('transformation_images')
    op.drop_table('success_stories')
    op.drop_table('gallery_items')
    op.drop_table('diet_logs')
    op.drop_table('workout_sessions')
    op.drop_constraint('fk_users_training_plan_id', 'users', type_='foreignkey')
    op.drop_table('training_plans')
    op.drop_table('users')
