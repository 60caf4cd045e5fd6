"""baseline_migration

Revision ID: 4c1e9a7b2d10
Revises:
Create Date: 2026-02-02 18:41:12.508113

Creates users, jobs, bullets, experience and the experience_bullets join table.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision: str = '4c1e9a7b2d10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def table_exists(table_name: str) -> bool:
    """Check if a table exists in the database."""
    bind = op.get_bind()
    inspector = inspect(bind)
    return table_name in inspector.get_table_names()


def timestamp_column(name: str) -> sa.Column:
    return sa.Column(name, sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False)


def upgrade() -> None:
    """Create tables that do not exist yet."""
    if not table_exists('users'):
        op.create_table('users',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('email', sa.String(length=255), nullable=False),
            sa.Column('full_name', sa.String(length=255), nullable=True),
            sa.Column('password_hash', sa.String(), nullable=False),
            timestamp_column('created_at'),
            timestamp_column('updated_at'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
        op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)

    if not table_exists('jobs'):
        op.create_table('jobs',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.Integer(), nullable=False),
            sa.Column('company_name', sa.String(length=255), nullable=False),
            sa.Column('description', sa.Text(), nullable=False),
            sa.Column('application_link', sa.String(), nullable=True),
            timestamp_column('created_at'),
            timestamp_column('updated_at'),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('idx_jobs_user_updated', 'jobs', ['user_id', 'updated_at'], unique=False)
        op.create_index(op.f('ix_jobs_id'), 'jobs', ['id'], unique=False)
        op.create_index(op.f('ix_jobs_user_id'), 'jobs', ['user_id'], unique=False)

    if not table_exists('bullets'):
        op.create_table('bullets',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.Integer(), nullable=False),
            sa.Column('text', sa.String(length=500), nullable=False),
            timestamp_column('created_at'),
            timestamp_column('updated_at'),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('idx_bullets_user_updated', 'bullets', ['user_id', 'updated_at'], unique=False)
        op.create_index(op.f('ix_bullets_id'), 'bullets', ['id'], unique=False)
        op.create_index(op.f('ix_bullets_user_id'), 'bullets', ['user_id'], unique=False)

    if not table_exists('experience'):
        op.create_table('experience',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.Integer(), nullable=False),
            sa.Column('company_name', sa.String(length=255), nullable=False),
            sa.Column('job_title', sa.String(length=255), nullable=False),
            sa.Column('start_date', sa.Date(), nullable=False),
            sa.Column('end_date', sa.Date(), nullable=True),
            sa.Column('is_current', sa.Boolean(), nullable=False),
            timestamp_column('created_at'),
            timestamp_column('updated_at'),
            sa.CheckConstraint('NOT (is_current AND end_date IS NOT NULL)', name='ck_experience_current_without_end_date'),
            sa.CheckConstraint('end_date IS NULL OR end_date > start_date', name='ck_experience_end_after_start'),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('idx_experience_user_start', 'experience', ['user_id', 'start_date'], unique=False)
        op.create_index(op.f('ix_experience_id'), 'experience', ['id'], unique=False)
        op.create_index(op.f('ix_experience_user_id'), 'experience', ['user_id'], unique=False)

    if not table_exists('experience_bullets'):
        op.create_table('experience_bullets',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('experience_id', sa.Integer(), nullable=False),
            sa.Column('bullet_id', sa.Integer(), nullable=False),
            timestamp_column('created_at'),
            sa.ForeignKeyConstraint(['bullet_id'], ['bullets.id'], ondelete='CASCADE'),
            sa.ForeignKeyConstraint(['experience_id'], ['experience.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('experience_id', 'bullet_id', name='uq_experience_bullet')
        )
        op.create_index(op.f('ix_experience_bullets_bullet_id'), 'experience_bullets', ['bullet_id'], unique=False)
        op.create_index(op.f('ix_experience_bullets_experience_id'), 'experience_bullets', ['experience_id'], unique=False)
        op.create_index(op.f('ix_experience_bullets_id'), 'experience_bullets', ['id'], unique=False)


def downgrade() -> None:
    """Drop all tables in dependency order."""
    op.drop_table('experience_bullets')
    op.drop_table('experience')
    op.drop_table('bullets')
    op.drop_table('jobs')
    op.drop_table('users')
