"""initial_schema

This migration creates:
1. User, user group and user role tables
2. Course, exercise, team and team membership tables
3. Grading criterion and structured grading instruction tables
4. System notification table

Revision ID: 4c1e2a9f7b30
Revises:
Create Date: 2026-10-19 09:12:41.204518

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4c1e2a9f7b30'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema - create all tables."""

    # 1. Users
    op.create_table('user',
        sa.Column('id', sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('login', sa.String(length=50), nullable=False),
        sa.Column('first_name', sa.String(length=255), nullable=True),
        sa.Column('last_name', sa.String(length=255), nullable=True),
        sa.Column('email', sa.String(length=320), nullable=True),
        sa.Column('password', sa.String(length=255), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('login'),
        sa.UniqueConstraint('email')
    )

    op.create_table('user_group',
        sa.Column('id', sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.BigInteger(), nullable=False),
        sa.Column('group_name', sa.String(length=255), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ondelete='CASCADE', onupdate='RESTRICT'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('user_group_user_id_group_name_key', 'user_group', ['user_id', 'group_name'], unique=True)
    op.create_index(op.f('ix_user_group_group_name'), 'user_group', ['group_name'], unique=False)

    op.create_table('user_role',
        sa.Column('id', sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.BigInteger(), nullable=False),
        sa.Column('role_id', sa.String(length=50), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ondelete='CASCADE', onupdate='RESTRICT'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('user_role_user_id_role_id_key', 'user_role', ['user_id', 'role_id'], unique=True)

    # 2. Courses, exercises and teams
    op.create_table('course',
        sa.Column('id', sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('short_name', sa.String(length=255), nullable=True),
        sa.Column('student_group_name', sa.String(length=255), nullable=True),
        sa.Column('teaching_assistant_group_name', sa.String(length=255), nullable=True),
        sa.Column('instructor_group_name', sa.String(length=255), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('short_name')
    )

    op.create_table('exercise',
        sa.Column('id', sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('mode', sa.Enum('individual', 'team', name='exercise_mode'), server_default='individual', nullable=False),
        sa.Column('course_id', sa.BigInteger(), nullable=False),
        sa.ForeignKeyConstraint(['course_id'], ['course.id'], ondelete='CASCADE', onupdate='RESTRICT'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_exercise_course_id'), 'exercise', ['course_id'], unique=False)

    op.create_table('team',
        sa.Column('id', sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('name', sa.String(length=250), nullable=False),
        sa.Column('short_name', sa.String(length=50), nullable=False),
        sa.Column('image', sa.String(length=2048), nullable=True),
        sa.Column('exercise_id', sa.BigInteger(), nullable=False),
        sa.Column('owner_id', sa.BigInteger(), nullable=True),
        sa.ForeignKeyConstraint(['exercise_id'], ['exercise.id'], ondelete='CASCADE', onupdate='RESTRICT'),
        sa.ForeignKeyConstraint(['owner_id'], ['user.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('short_name')
    )
    op.create_index('team_exercise_id_idx', 'team', ['exercise_id'], unique=False)

    op.create_table('team_student',
        sa.Column('team_id', sa.BigInteger(), nullable=False),
        sa.Column('student_id', sa.BigInteger(), nullable=False),
        sa.ForeignKeyConstraint(['team_id'], ['team.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['student_id'], ['user.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('team_id', 'student_id')
    )

    # 3. Grading criteria
    op.create_table('grading_criterion',
        sa.Column('id', sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(length=255), nullable=True),
        sa.Column('exercise_id', sa.BigInteger(), nullable=False),
        sa.ForeignKeyConstraint(['exercise_id'], ['exercise.id'], ondelete='CASCADE', onupdate='RESTRICT'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_grading_criterion_exercise_id'), 'grading_criterion', ['exercise_id'], unique=False)

    op.create_table('structured_grading_instruction',
        sa.Column('id', sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column('credits', sa.Float(), nullable=False),
        sa.Column('grading_scale', sa.String(length=255), nullable=True),
        sa.Column('instruction_description', sa.String(length=16384), nullable=True),
        sa.Column('feedback', sa.String(length=16384), nullable=True),
        sa.Column('usage_count', sa.Integer(), nullable=False),
        sa.Column('grading_criterion_id', sa.BigInteger(), nullable=False),
        sa.ForeignKeyConstraint(['grading_criterion_id'], ['grading_criterion.id'], ondelete='CASCADE', onupdate='RESTRICT'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(
        op.f('ix_structured_grading_instruction_grading_criterion_id'),
        'structured_grading_instruction', ['grading_criterion_id'], unique=False
    )

    # 4. System notifications
    op.create_table('system_notification',
        sa.Column('id', sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('text', sa.String(length=16384), nullable=True),
        sa.Column('type', sa.Enum('INFO', 'WARNING', name='system_notification_type'), server_default='INFO', nullable=False),
        sa.Column('notification_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('expire_date', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('system_notification_window_idx', 'system_notification', ['notification_date', 'expire_date'], unique=False)


def downgrade() -> None:
    """Downgrade schema - drop all tables."""
    op.drop_index('system_notification_window_idx', table_name='system_notification')
    op.drop_table('system_notification')

    op.drop_index(op.f('ix_structured_grading_instruction_grading_criterion_id'), table_name='structured_grading_instruction')
    op.drop_table('structured_grading_instruction')
    op.drop_index(op.f('ix_grading_criterion_exercise_id'), table_name='grading_criterion')
    op.drop_table('grading_criterion')

    op.drop_table('team_student')
    op.drop_index('team_exercise_id_idx', table_name='team')
    op.drop_table('team')
    op.drop_index(op.f('ix_exercise_course_id'), table_name='exercise')
    op.drop_table('exercise')
    op.drop_table('course')

    op.drop_index('user_role_user_id_role_id_key', table_name='user_role')
    op.drop_table('user_role')
    op.drop_index(op.f('ix_user_group_group_name'), table_name='user_group')
    op.drop_index('user_group_user_id_group_name_key', table_name='user_group')
    op.drop_table('user_group')
    op.drop_table('user')

    sa.Enum(name='system_notification_type').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='exercise_mode').drop(op.get_bind(), checkfirst=True)
