"""Create users, candidate profiles, company brandings, jobs and job applications

Revision ID: 8c1d2e4f6a01
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '8c1d2e4f6a01'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _base_columns():
    return [
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        *_base_columns(),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('company', sa.String(length=100), nullable=True),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'])
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table(
        'candidate_profiles',
        *_base_columns(),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('resume', sa.String(length=500), nullable=True),
        sa.Column('skills', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('companies', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('designations', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('looking_for_roles', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('experience', sa.Integer(), nullable=True),
        sa.Column('education', sa.Text(), nullable=True),
        sa.Column('location', sa.String(length=255), nullable=True),
        sa.Column('available_for_work', sa.Boolean(), nullable=True),
        sa.Column('is_new_to_experience', sa.Boolean(), nullable=True),
        sa.Column('years_of_experience', sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id'),
    )
    op.create_index(op.f('ix_candidate_profiles_id'), 'candidate_profiles', ['id'])

    op.create_table(
        'company_brandings',
        *_base_columns(),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('company_name', sa.String(length=100), nullable=False),
        sa.Column('company_slug', sa.String(length=50), nullable=False),
        sa.Column('logo_url', sa.String(length=500), nullable=True),
        sa.Column('banner_url', sa.String(length=500), nullable=True),
        sa.Column('culture_video_url', sa.String(length=500), nullable=True),
        sa.Column('primary_color', sa.String(length=7), nullable=False),
        sa.Column('secondary_color', sa.String(length=7), nullable=False),
        sa.Column('accent_color', sa.String(length=7), nullable=False),
        sa.Column('sections', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('is_published', sa.Boolean(), nullable=False),
        sa.Column('published_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_company_brandings_id'), 'company_brandings', ['id'])
    op.create_index(op.f('ix_company_brandings_user_id'), 'company_brandings', ['user_id'])
    op.create_index(
        op.f('ix_company_brandings_company_slug'), 'company_brandings', ['company_slug'], unique=True
    )

    op.create_table(
        'jobs',
        *_base_columns(),
        sa.Column('company_branding_id', sa.Uuid(), nullable=False),
        sa.Column('title', sa.String(length=150), nullable=False),
        sa.Column('location', sa.String(length=100), nullable=False),
        sa.Column('job_type', sa.String(length=20), nullable=False),
        sa.Column('experience_level', sa.String(length=20), nullable=False),
        sa.Column('employment_type', sa.String(length=20), nullable=False),
        sa.Column('department', sa.String(length=100), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('technical_requirements', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('soft_skills', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('responsibilities', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('benefits', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('skills', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('salary_min', sa.Integer(), nullable=True),
        sa.Column('salary_max', sa.Integer(), nullable=True),
        sa.Column('salary_currency', sa.String(length=3), nullable=True),
        sa.Column('contact_email', sa.String(length=255), nullable=True),
        sa.Column('career_slug', sa.String(length=200), nullable=True),
        sa.Column('application_url', sa.String(length=500), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('posted_at', sa.DateTime(), nullable=False),
        sa.Column('expires_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint(
            'salary_min IS NULL OR salary_max IS NULL OR salary_max >= salary_min',
            name='ck_jobs_salary_range',
        ),
        sa.ForeignKeyConstraint(['company_branding_id'], ['company_brandings.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_jobs_id'), 'jobs', ['id'])
    op.create_index(op.f('ix_jobs_company_branding_id'), 'jobs', ['company_branding_id'])
    op.create_index(op.f('ix_jobs_title'), 'jobs', ['title'])
    op.create_index(op.f('ix_jobs_job_type'), 'jobs', ['job_type'])
    op.create_index(op.f('ix_jobs_experience_level'), 'jobs', ['experience_level'])
    op.create_index(op.f('ix_jobs_career_slug'), 'jobs', ['career_slug'])
    op.create_index(op.f('ix_jobs_is_active'), 'jobs', ['is_active'])
    op.create_index(op.f('ix_jobs_posted_at'), 'jobs', ['posted_at'])

    op.create_table(
        'job_applications',
        *_base_columns(),
        sa.Column('job_id', sa.Uuid(), nullable=False),
        sa.Column('candidate_name', sa.String(length=255), nullable=False),
        sa.Column('candidate_email', sa.String(length=255), nullable=False),
        sa.Column('candidate_phone', sa.String(length=20), nullable=True),
        sa.Column('candidate_profile_url', sa.String(length=500), nullable=True),
        sa.Column('resume_url', sa.String(length=500), nullable=True),
        sa.Column('cover_letter', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('applied_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['job_id'], ['jobs.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('job_id', 'candidate_email', name='uq_job_applications_job_candidate'),
    )
    op.create_index(op.f('ix_job_applications_id'), 'job_applications', ['id'])
    op.create_index(op.f('ix_job_applications_job_id'), 'job_applications', ['job_id'])
    op.create_index(op.f('ix_job_applications_candidate_email'), 'job_applications', ['candidate_email'])


def downgrade() -> None:
    op.drop_table('job_applications')
    op.drop_table('jobs')
    op.drop_table('company_brandings')
    op.drop_table('candidate_profiles')
    op.drop_table('users')
