"""initial

Revision ID: 3c1f0a9d2b7e
Revises:
Create Date: 2025-09-14 10:22:31.408112

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3c1f0a9d2b7e'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

user_role = sa.Enum('user', 'admin', 'environmentalist', name='userrole')
user_status = sa.Enum('active', 'inactive', name='userstatus')
resource_type = sa.Enum('electricity', 'water', 'waste', name='resourcetype')
enrollment_status = sa.Enum('joined', 'completed', 'failed', 'withdrawn', name='enrollmentstatus')


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('role', user_role, nullable=False),
        sa.Column('city', sa.String(length=100), nullable=True),
        sa.Column('photo', sa.String(length=255), nullable=False),
        sa.Column('status', user_status, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    for table, constraint in (('electricity_usage', 'electricity'), ('water_usage', 'water')):
        op.create_table(
            table,
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
            sa.Column('billing_month', sa.Date(), nullable=False),
            sa.Column('units', sa.Float(), nullable=False),
            sa.Column('last_reading', sa.Float(), nullable=True),
            sa.Column('latest_reading', sa.Float(), nullable=True),
            sa.Column('account_no', sa.String(length=50), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
            sa.UniqueConstraint('user_id', 'billing_month', name=f'uq_{constraint}_user_month'),
            sa.CheckConstraint('units >= 0', name=f'ck_{constraint}_units_non_negative'),
        )
        op.create_index(f'ix_{table}_id', table, ['id'])
        op.create_index(f'ix_{table}_user_id', table, ['user_id'])

    op.create_table(
        'waste_usage',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('plastic_bags', sa.Integer(), nullable=False),
        sa.Column('paper_bags', sa.Integer(), nullable=False),
        sa.Column('food_waste_bags', sa.Integer(), nullable=False),
        sa.Column('collection_date', sa.Date(), nullable=False),
        sa.Column('collection_week', sa.Integer(), nullable=True),
        sa.Column('collection_month', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint(
            'plastic_bags >= 0 AND paper_bags >= 0 AND food_waste_bags >= 0',
            name='ck_waste_bags_non_negative'
        ),
    )
    op.create_index('ix_waste_usage_id', 'waste_usage', ['id'])
    op.create_index('ix_waste_usage_user_id', 'waste_usage', ['user_id'])
    op.create_index('ix_waste_user_collection', 'waste_usage', ['user_id', 'collection_date'])

    op.create_table(
        'sustainability_profiles',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, unique=True),
        sa.Column('primary_water_sources', sa.JSON(), nullable=False),
        sa.Column('primary_energy_sources', sa.JSON(), nullable=False),
        sa.Column('separate_waste', sa.Boolean(), nullable=False),
        sa.Column('compost_waste', sa.Boolean(), nullable=False),
        sa.Column('plastic_bag_size', sa.Integer(), nullable=False),
        sa.Column('food_waste_bag_size', sa.Integer(), nullable=False),
        sa.Column('paper_waste_bag_size', sa.Integer(), nullable=False),
        sa.Column('profile_completed', sa.Boolean(), nullable=False),
        sa.Column('last_updated', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint('plastic_bag_size BETWEEN 1 AND 100', name='ck_profile_plastic_bag_size'),
        sa.CheckConstraint('food_waste_bag_size BETWEEN 1 AND 100', name='ck_profile_food_bag_size'),
        sa.CheckConstraint('paper_waste_bag_size BETWEEN 1 AND 100', name='ck_profile_paper_bag_size'),
    )
    op.create_index('ix_sustainability_profiles_id', 'sustainability_profiles', ['id'])

    op.create_table(
        'challenges',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('goal', sa.Float(), nullable=False),
        sa.Column('unit', sa.String(length=50), nullable=False),
        sa.Column('resource_type', resource_type, nullable=True),
        sa.Column('start_date', sa.DateTime(), nullable=False),
        sa.Column('end_date', sa.DateTime(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint('goal > 0', name='ck_challenge_goal_positive'),
        sa.CheckConstraint('end_date > start_date', name='ck_challenge_window'),
    )
    op.create_index('ix_challenges_id', 'challenges', ['id'])
    op.create_index('ix_challenges_end_date', 'challenges', ['end_date'])

    op.create_table(
        'user_challenges',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('challenge_id', sa.Integer(), sa.ForeignKey('challenges.id', ondelete='CASCADE'), nullable=False),
        sa.Column('start_value', sa.Float(), nullable=False),
        sa.Column('end_value', sa.Float(), nullable=False),
        sa.Column('status', enrollment_status, nullable=False),
        sa.Column('points_earned', sa.Integer(), nullable=False),
        sa.Column('joined_date', sa.DateTime(), nullable=False),
        sa.Column('completion_date', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint('user_id', 'challenge_id', name='uq_user_challenge'),
        sa.CheckConstraint('start_value >= 0', name='ck_enrollment_start_value'),
        sa.CheckConstraint('end_value >= 0', name='ck_enrollment_end_value'),
        sa.CheckConstraint('points_earned >= 0', name='ck_enrollment_points'),
    )
    op.create_index('ix_user_challenges_id', 'user_challenges', ['id'])
    op.create_index('ix_user_challenges_user_id', 'user_challenges', ['user_id'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('user_challenges')
    op.drop_table('challenges')
    op.drop_table('sustainability_profiles')
    op.drop_table('waste_usage')
    op.drop_table('water_usage')
    op.drop_table('electricity_usage')
    op.drop_table('users')

    bind = op.get_bind()
    for enum_type in (enrollment_status, resource_type, user_status, user_role):
        enum_type.drop(bind, checkfirst=True)
