"""create_jobly_tables

Revision ID: 3f9c2a7d1b04
Revises:
Create Date: 2026-10-18 00:45:12.318402

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9c2a7d1b04'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'companies',
        sa.Column('handle', sa.String(length=25), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('num_employees', sa.Integer(), nullable=True),
        sa.Column('logo_url', sa.Text(), nullable=True),
        sa.CheckConstraint('num_employees >= 0', name='ck_companies_num_employees'),
        sa.PrimaryKeyConstraint('handle'),
        sa.UniqueConstraint('name'),
    )

    op.create_table(
        'users',
        sa.Column('username', sa.String(length=25), nullable=False),
        sa.Column('password', sa.Text(), nullable=False),
        sa.Column('first_name', sa.Text(), nullable=False),
        sa.Column('last_name', sa.Text(), nullable=False),
        sa.Column('email', sa.Text(), nullable=False),
        sa.Column('is_admin', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.PrimaryKeyConstraint('username'),
    )

    op.create_table(
        'jobs',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('salary', sa.Integer(), nullable=True),
        sa.Column('equity', sa.Numeric().with_variant(sa.Text(), 'sqlite'), nullable=True),
        sa.Column('company_handle', sa.String(length=25), nullable=False),
        sa.CheckConstraint('salary >= 0', name='ck_jobs_salary'),
        sa.CheckConstraint('CAST(equity AS NUMERIC) <= 1', name='ck_jobs_equity'),
        sa.ForeignKeyConstraint(['company_handle'], ['companies.handle'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True,
    )
    op.create_index(op.f('ix_jobs_company_handle'), 'jobs', ['company_handle'], unique=False)

    op.create_table(
        'applications',
        sa.Column('username', sa.String(length=25), nullable=False),
        sa.Column('job_id', sa.Integer(), nullable=False),
        sa.Column('state', sa.String(length=25), nullable=False, server_default='applied'),
        sa.ForeignKeyConstraint(['username'], ['users.username'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['job_id'], ['jobs.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('username', 'job_id'),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('applications')
    op.drop_index(op.f('ix_jobs_company_handle'), table_name='jobs')
    op.drop_table('jobs')
    op.drop_table('users')
    op.drop_table('companies')
