"""create academy tables

Revision ID: 3f2a9c1d7b40
Revises:
Create Date: 2024-09-01 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f2a9c1d7b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    ]


def upgrade() -> None:
    """Create academy tables."""

    op.create_table('users',
        sa.Column('id', sa.String(length=255), nullable=False),
        sa.Column('username', sa.String(length=100), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('roles', sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('username')
    )

    op.create_table('students',
        sa.Column('id', sa.String(length=255), nullable=False),
        sa.Column('id_prefix', sa.String(length=50), nullable=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('gender', sa.String(length=10), nullable=True),
        sa.Column('username', sa.String(length=255), nullable=True),
        sa.Column('dob', sa.Date(), nullable=True),
        sa.Column('nationality', sa.String(length=100), nullable=True),
        sa.Column('instrument_interest', sa.String(length=255), nullable=True),
        sa.Column('enrollment_date', sa.Date(), nullable=True),
        sa.Column('level', sa.String(length=100), nullable=False),
        sa.Column('payment_plan', sa.String(length=16), server_default='none', nullable=True),
        sa.Column('subscription_start_date', sa.Date(), nullable=True),
        sa.Column('preferred_pay_day', sa.Integer(), nullable=True),
        sa.Column('avatar', sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("gender IN ('male','female')", name='ck_student_gender'),
        sa.CheckConstraint("payment_plan IN ('monthly','quarterly','yearly','none')", name='ck_student_payment_plan'),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table('level_history',
        sa.Column('id', sa.String(length=255), nullable=False),
        sa.Column('student_id', sa.String(length=255), nullable=False),
        sa.Column('previous_level', sa.String(length=100), nullable=True),
        sa.Column('new_level', sa.String(length=100), nullable=False),
        sa.Column('change_date', sa.Date(), nullable=False),
        sa.Column('review_comments', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.ForeignKeyConstraint(['student_id'], ['students.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_level_history_student_id'), 'level_history', ['student_id'], unique=False)

    op.create_table('grades',
        sa.Column('id', sa.String(length=255), nullable=False),
        sa.Column('student_id', sa.String(length=255), nullable=False),
        sa.Column('subject', sa.String(length=255), nullable=False),
        sa.Column('type', sa.String(length=16), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('score', sa.Numeric(precision=5, scale=2), nullable=False),
        sa.Column('max_score', sa.Numeric(precision=5, scale=2), nullable=False),
        sa.Column('grade_date', sa.Date(), nullable=False),
        sa.Column('attachment_json', sa.Text(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("type IN ('test','assignment','quiz')", name='ck_grade_type'),
        sa.ForeignKeyConstraint(['student_id'], ['students.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_grades_student_id'), 'grades', ['student_id'], unique=False)

    op.create_table('evaluations',
        sa.Column('id', sa.String(length=255), nullable=False),
        sa.Column('student_id', sa.String(length=255), nullable=False),
        sa.Column('evaluation_date', sa.Date(), nullable=False),
        sa.Column('evaluator', sa.String(length=255), nullable=False),
        sa.Column('criteria_json', sa.Text(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['student_id'], ['students.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_evaluations_student_id'), 'evaluations', ['student_id'], unique=False)
    op.create_index('ix_evaluations_student_date', 'evaluations', ['student_id', 'evaluation_date'], unique=False)

    op.create_table('semesters',
        sa.Column('id', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('teachers_json', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table('sessions',
        sa.Column('id', sa.String(length=255), nullable=False),
        sa.Column('semester_id', sa.String(length=255), nullable=False),
        sa.Column('teacher_name', sa.String(length=255), nullable=False),
        sa.Column('day_of_week', sa.String(length=20), nullable=False),
        sa.Column('time_slot', sa.String(length=50), nullable=False),
        sa.Column('duration', sa.Numeric(precision=3, scale=1), nullable=False),
        sa.Column('specialization', sa.String(length=255), nullable=True),
        sa.Column('type', sa.String(length=16), nullable=False),
        sa.Column('note', sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("type IN ('practical','theory')", name='ck_session_type'),
        sa.ForeignKeyConstraint(['semester_id'], ['semesters.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_sessions_semester_id'), 'sessions', ['semester_id'], unique=False)
    op.create_index(op.f('ix_sessions_teacher_name'), 'sessions', ['teacher_name'], unique=False)

    op.create_table('session_students',
        sa.Column('id', sa.String(length=255), nullable=False),
        sa.Column('session_id', sa.String(length=255), nullable=False),
        sa.Column('student_id', sa.String(length=255), nullable=False),
        sa.Column('pending_removal', sa.Boolean(), server_default=sa.false(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['session_id'], ['sessions.id']),
        sa.ForeignKeyConstraint(['student_id'], ['students.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('session_id', 'student_id', name='uq_session_student')
    )
    op.create_index(op.f('ix_session_students_session_id'), 'session_students', ['session_id'], unique=False)
    op.create_index(op.f('ix_session_students_student_id'), 'session_students', ['student_id'], unique=False)

    op.create_table('attendance',
        sa.Column('id', sa.String(length=255), nullable=False),
        sa.Column('session_id', sa.String(length=255), nullable=False),
        sa.Column('student_id', sa.String(length=255), nullable=False),
        sa.Column('week_start_date', sa.Date(), nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False),
        sa.Column('note', sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("status IN ('present','absent','late','excused')", name='ck_attendance_status'),
        sa.ForeignKeyConstraint(['session_id'], ['sessions.id']),
        sa.ForeignKeyConstraint(['student_id'], ['students.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('session_id', 'student_id', 'week_start_date', name='uq_attendance_week')
    )
    op.create_index(op.f('ix_attendance_session_id'), 'attendance', ['session_id'], unique=False)
    op.create_index(op.f('ix_attendance_student_id'), 'attendance', ['student_id'], unique=False)
    op.create_index(op.f('ix_attendance_week_start_date'), 'attendance', ['week_start_date'], unique=False)

    op.create_table('installments',
        sa.Column('id', sa.String(length=255), nullable=False),
        sa.Column('student_id', sa.String(length=255), nullable=False),
        sa.Column('due_date', sa.Date(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('status', sa.String(length=16), server_default='unpaid', nullable=False),
        sa.Column('payment_date', sa.Date(), nullable=True),
        sa.Column('grace_period_until', sa.Date(), nullable=True),
        sa.Column('invoice_number', sa.String(length=100), nullable=True),
        sa.Column('payment_method', sa.String(length=16), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("status IN ('unpaid','paid')", name='ck_installment_status'),
        sa.CheckConstraint("payment_method IN ('visa','mada','cash','transfer')", name='ck_installment_method'),
        sa.ForeignKeyConstraint(['student_id'], ['students.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_installments_student_id'), 'installments', ['student_id'], unique=False)
    op.create_index(op.f('ix_installments_due_date'), 'installments', ['due_date'], unique=False)

    op.create_table('due_date_changes',
        sa.Column('id', sa.String(length=255), nullable=False),
        sa.Column('student_id', sa.String(length=255), nullable=False),
        sa.Column('change_date', sa.Date(), nullable=False),
        sa.Column('old_day', sa.Integer(), nullable=False),
        sa.Column('new_day', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.ForeignKeyConstraint(['student_id'], ['students.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_due_date_changes_student_id'), 'due_date_changes', ['student_id'], unique=False)

    op.create_table('teacher_requests',
        sa.Column('id', sa.String(length=255), nullable=False),
        sa.Column('type', sa.String(length=32), nullable=False),
        sa.Column('status', sa.String(length=16), server_default='pending', nullable=False),
        sa.Column('request_date', sa.Date(), nullable=False),
        sa.Column('teacher_id', sa.String(length=255), nullable=False),
        sa.Column('teacher_name', sa.String(length=255), nullable=False),
        sa.Column('student_id', sa.String(length=255), nullable=True),
        sa.Column('student_name', sa.String(length=255), nullable=True),
        sa.Column('session_id', sa.String(length=255), nullable=True),
        sa.Column('session_time', sa.String(length=50), nullable=True),
        sa.Column('day', sa.String(length=20), nullable=True),
        sa.Column('reason', sa.Text(), nullable=True),
        sa.Column('semester_id', sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("type IN ('remove-student','change-time','add-student')", name='ck_request_type'),
        sa.CheckConstraint("status IN ('pending','approved','denied')", name='ck_request_status'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_teacher_requests_status'), 'teacher_requests', ['status'], unique=False)
    op.create_index(op.f('ix_teacher_requests_teacher_id'), 'teacher_requests', ['teacher_id'], unique=False)
    op.create_index(op.f('ix_teacher_requests_semester_id'), 'teacher_requests', ['semester_id'], unique=False)


def downgrade() -> None:
    """Drop academy tables."""
    for table in (
        'teacher_requests', 'due_date_changes', 'installments', 'attendance', 'session_students',
        'sessions', 'semesters', 'evaluations', 'grades', 'level_history', 'students', 'users',
    ):
        op.drop_table(table)
