"""initial_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19 10:12:04.118305

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '0001'
down_revision = None
branch_labels = None
depends_on = None


user_role = sa.Enum('citizen', 'sweeper', 'admin', name='userrole')
complaint_category = sa.Enum('garbage', 'road', 'river', 'public', name='complaintcategory')
complaint_status = sa.Enum('submitted', 'review', 'done', name='complaintstatus')
complaint_priority = sa.Enum('normal', 'high', name='complaintpriority')
feedback_rating = sa.Enum('poor', 'avg', 'good', name='feedbackrating')


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('role', user_role, nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'complaints',
        sa.Column('id', sa.String(20), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_name', sa.String(), nullable=False),
        sa.Column('category', complaint_category, nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('before_image', sa.String(), nullable=False),
        sa.Column('after_image', sa.String(), nullable=True),
        sa.Column('latitude', sa.Float(), nullable=False),
        sa.Column('longitude', sa.Float(), nullable=False),
        sa.Column('status', complaint_status, nullable=False),
        sa.Column('priority', complaint_priority, nullable=False),
        sa.Column('assigned_sweeper_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('assigned_sweeper_name', sa.String(), nullable=True),
        sa.Column('feedback', feedback_rating, nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint("after_image IS NULL OR status IN ('review', 'done')", name='check_after_image_status'),
        sa.CheckConstraint("status != 'done' OR after_image IS NOT NULL", name='check_done_has_after_image'),
        sa.CheckConstraint("feedback IS NULL OR status = 'done'", name='check_feedback_status'),
        sa.CheckConstraint("assigned_sweeper_id IS NULL OR status IN ('review', 'done')", name='check_assignment_status'),
    )
    op.create_index('ix_complaints_user_id', 'complaints', ['user_id'])
    op.create_index('ix_complaints_status', 'complaints', ['status'])
    op.create_index('ix_complaints_assigned_sweeper_id', 'complaints', ['assigned_sweeper_id'])
    op.create_index('ix_complaints_created_at', 'complaints', ['created_at'])

    op.create_table(
        'volunteer_events',
        sa.Column('id', sa.String(20), primary_key=True),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('latitude', sa.Float(), nullable=False),
        sa.Column('longitude', sa.Float(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('created_by', sa.Integer(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_volunteer_events_date', 'volunteer_events', ['date'])

    op.create_table(
        'event_participants',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('event_id', sa.String(20), sa.ForeignKey('volunteer_events.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('joined_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint('event_id', 'user_id', name='uq_event_participant'),
    )
    op.create_index('ix_event_participants_id', 'event_participants', ['id'])
    op.create_index('ix_event_participants_event_id', 'event_participants', ['event_id'])
    op.create_index('ix_event_participants_user_id', 'event_participants', ['user_id'])


def downgrade() -> None:
    op.drop_table('event_participants')
    op.drop_table('volunteer_events')
    op.drop_table('complaints')
    op.drop_table('users')
    for enum_type in (feedback_rating, complaint_priority, complaint_status, complaint_category, user_role):
        enum_type.drop(op.get_bind(), checkfirst=True)
