"""Create initial tables"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '3a7c1e9d2b40'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # Create users table
    op.create_table(
        'users',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('username', sa.String(50), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('name', sa.String(255), nullable=True),
        sa.Column('role', sa.String(20), nullable=False),
        sa.Column('phone', sa.String(20), nullable=True),
        sa.Column('roll_number', sa.String(50), nullable=True),
        sa.Column('course', sa.String(100), nullable=True),
        sa.Column('year', sa.String(20), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('roll_number')
    )
    op.create_index(op.f('ix_users_username'), 'users', ['username'], unique=True)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_role'), 'users', ['role'])

    # Create organization_students table
    op.create_table(
        'organization_students',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('organization_id', sa.String(36), nullable=False),
        sa.Column('student_id', sa.String(36), nullable=False),
        sa.Column('roll_number', sa.String(50), nullable=True),
        sa.Column('course', sa.String(100), nullable=True),
        sa.Column('year', sa.String(20), nullable=True),
        sa.Column('status', sa.String(20), server_default='active'),
        sa.Column('joined_date', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['organization_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['student_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('organization_id', 'student_id', name='uq_organization_student')
    )
    op.create_index(op.f('ix_organization_students_organization_id'), 'organization_students', ['organization_id'])
    op.create_index(op.f('ix_organization_students_student_id'), 'organization_students', ['student_id'])
    op.create_index(op.f('ix_organization_students_status'), 'organization_students', ['status'])

    # Create events table
    op.create_table(
        'events',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('organization_id', sa.String(36), nullable=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('type', sa.String(20), nullable=False),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('registration_deadline', sa.DateTime(timezone=True), nullable=False),
        sa.Column('venue', sa.String(255), nullable=True),
        sa.Column('max_participants', sa.Integer(), nullable=True),
        sa.Column('requirements', sa.Text(), nullable=True),
        sa.Column('prizes', sa.Text(), nullable=True),
        sa.Column('visibility', sa.String(10), server_default='public'),
        sa.Column('event_code', sa.String(20), nullable=True),
        sa.Column('approval_status', sa.String(20), server_default='approved'),
        sa.Column('approval_feedback', sa.Text(), nullable=True),
        sa.Column('approved_by', sa.String(36), nullable=True),
        sa.Column('approved_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_by_role', sa.String(20), nullable=False),
        sa.Column('created_by_id', sa.String(36), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['organization_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['created_by_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('event_code')
    )
    op.create_index(op.f('ix_events_organization_id'), 'events', ['organization_id'])
    op.create_index(op.f('ix_events_approval_status'), 'events', ['approval_status'])
    op.create_index(op.f('ix_events_created_by_id'), 'events', ['created_by_id'])

    # Create event_registrations table
    op.create_table(
        'event_registrations',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('event_id', sa.String(36), nullable=False),
        sa.Column('student_id', sa.String(36), nullable=False),
        sa.Column('status', sa.String(20), server_default='registered'),
        sa.Column('registered_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['student_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('event_id', 'student_id', name='uq_event_registration')
    )
    op.create_index(op.f('ix_event_registrations_event_id'), 'event_registrations', ['event_id'])
    op.create_index(op.f('ix_event_registrations_student_id'), 'event_registrations', ['student_id'])
    op.create_index(op.f('ix_event_registrations_status'), 'event_registrations', ['status'])

    # Create courses table
    op.create_table(
        'courses',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('organization_id', sa.String(36), nullable=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('instructor', sa.String(255), nullable=False),
        sa.Column('duration', sa.String(100), nullable=False),
        sa.Column('level', sa.String(20), nullable=False),
        sa.Column('category', sa.String(100), nullable=False),
        sa.Column('thumbnail', sa.Text(), nullable=True),
        sa.Column('video_url', sa.Text(), nullable=True),
        sa.Column('materials', sa.Text(), nullable=True),
        sa.Column('quiz_data', sa.JSON(), nullable=True),
        sa.Column('created_by_id', sa.String(36), nullable=False),
        sa.Column('created_by_role', sa.String(20), nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['organization_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['created_by_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_courses_organization_id'), 'courses', ['organization_id'])
    op.create_index(op.f('ix_courses_title'), 'courses', ['title'])
    op.create_index(op.f('ix_courses_created_by_id'), 'courses', ['created_by_id'])

    # Create course_enrollments table
    op.create_table(
        'course_enrollments',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('course_id', sa.String(36), nullable=False),
        sa.Column('student_id', sa.String(36), nullable=False),
        sa.Column('enrolled_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('progress', sa.Float(), server_default='0'),
        sa.Column('quiz_score', sa.Float(), nullable=True),
        sa.Column('completed', sa.Boolean(), server_default=sa.false()),
        sa.Column('completion_date', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['course_id'], ['courses.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['student_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('course_id', 'student_id', name='uq_course_enrollment')
    )
    op.create_index(op.f('ix_course_enrollments_course_id'), 'course_enrollments', ['course_id'])
    op.create_index(op.f('ix_course_enrollments_student_id'), 'course_enrollments', ['student_id'])
    op.create_index(op.f('ix_course_enrollments_completed'), 'course_enrollments', ['completed'])

    # Create announcements table
    op.create_table(
        'announcements',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('organization_id', sa.String(36), nullable=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('priority', sa.String(10), server_default='normal'),
        sa.Column('created_by_id', sa.String(36), nullable=False),
        sa.Column('created_by_role', sa.String(20), nullable=False),
        sa.Column('author', sa.String(255), nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['organization_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['created_by_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_announcements_organization_id'), 'announcements', ['organization_id'])
    op.create_index(op.f('ix_announcements_priority'), 'announcements', ['priority'])

    # Create organization_requests table
    op.create_table(
        'organization_requests',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('organization_name', sa.String(255), nullable=False),
        sa.Column('contact_person', sa.String(255), nullable=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(20), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('status', sa.String(20), server_default='pending'),
        sa.Column('requested_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('reviewed_by', sa.String(36), nullable=True),
        sa.Column('reviewed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('rejection_reason', sa.Text(), nullable=True),
        sa.Column('username', sa.String(50), nullable=True),
        sa.Column('generated_password', sa.String(255), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_organization_requests_email'), 'organization_requests', ['email'])
    op.create_index(op.f('ix_organization_requests_status'), 'organization_requests', ['status'])


def downgrade():
    op.drop_index(op.f('ix_organization_requests_status'), table_name='organization_requests')
    op.drop_index(op.f('ix_organization_requests_email'), table_name='organization_requests')
    op.drop_table('organization_requests')
    op.drop_index(op.f('ix_announcements_priority'), table_name='announcements')
    op.drop_index(op.f('ix_announcements_organization_id'), table_name='announcements')
    op.drop_table('announcements')
    op.drop_index(op.f('ix_course_enrollments_completed'), table_name='course_enrollments')
    op.drop_index(op.f('ix_course_enrollments_student_id'), table_name='course_enrollments')
    op.drop_index(op.f('ix_course_enrollments_course_id'), table_name='course_enrollments')
    op.drop_table('course_enrollments')
    op.drop_index(op.f('ix_courses_created_by_id'), table_name='courses')
    op.drop_index(op.f('ix_courses_title'), table_name='courses')
    op.drop_index(op.f('ix_courses_organization_id'), table_name='courses')
    op.drop_table('courses')
    op.drop_index(op.f('ix_event_registrations_status'), table_name='event_registrations')
    op.drop_index(op.f('ix_event_registrations_student_id'), table_name='event_registrations')
    op.drop_index(op.f('ix_event_registrations_event_id'), table_name='event_registrations')
    op.drop_table('event_registrations')
    op.drop_index(op.f('ix_events_created_by_id'), table_name='events')
    op.drop_index(op.f('ix_events_approval_status'), table_name='events')
    op.drop_index(op.f('ix_events_organization_id'), table_name='events')
    op.drop_table('events')
    op.drop_index(op.f('ix_organization_students_status'), table_name='organization_students')
    op.drop_index(op.f('ix_organization_students_student_id'), table_name='organization_students')
    op.drop_index(op.f('ix_organization_students_organization_id'), table_name='organization_students')
    op.drop_table('organization_students')
    op.drop_index(op.f('ix_users_role'), table_name='users')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_index(op.f('ix_users_username'), table_name='users')
    op.drop_table('users')
