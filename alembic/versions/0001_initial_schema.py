"""initial schema: users, job_applications, resumes

Revision ID: 0001_initial
Revises: 
Create Date: 2026-10-17

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '0001_initial'
down_revision = None
branch_labels = None
depends_on = None

application_status = sa.Enum(
    'WISHLIST', 'APPLIED', 'INTERVIEW', 'OFFER', 'REJECTED', name='application_status'
)


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('email', sa.String(length=320), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    # Unique email is what makes duplicate registrations fail atomically
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'job_applications',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('title', sa.String(length=512), nullable=False),
        sa.Column('company', sa.String(length=512), nullable=False),
        sa.Column('job_description', sa.Text(), nullable=False),
        sa.Column('status', application_status, nullable=False),
        sa.Column('job_url', sa.String(length=2048), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('application_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_job_applications_user_id', 'job_applications', ['user_id'])
    op.create_index('ix_job_applications_application_date', 'job_applications', ['application_date'])

    op.create_table(
        'resumes',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('data', sa.JSON(), nullable=True),
        sa.Column('context', sa.Text(), nullable=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_resumes_user_id', 'resumes', ['user_id'])
    op.create_index('ix_resumes_updated_at', 'resumes', ['updated_at'])


def downgrade() -> None:
    op.drop_index('ix_resumes_updated_at', table_name='resumes')
    op.drop_index('ix_resumes_user_id', table_name='resumes')
    op.drop_table('resumes')
    op.drop_index('ix_job_applications_application_date', table_name='job_applications')
    op.drop_index('ix_job_applications_user_id', table_name='job_applications')
    op.drop_table('job_applications')
    application_status.drop(op.get_bind(), checkfirst=True)
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
