"""resume core tables

Revision ID: 0001
Revises:
Create Date: 2026-10-19 09:12:44.118203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ORDERED_SECTIONS = {
    'experiences': [
        sa.Column('company', sa.String(255), nullable=False),
        sa.Column('position', sa.String(255), nullable=False),
        sa.Column('duration', sa.String(120), nullable=False),
        sa.Column('bullets', sa.JSON(), nullable=False),
    ],
    'educations': [
        sa.Column('institution', sa.String(255), nullable=False),
        sa.Column('degree', sa.String(255), nullable=False),
        sa.Column('duration', sa.String(120), nullable=False),
        sa.Column('achievements', sa.JSON(), nullable=False),
    ],
    'skills': [
        sa.Column('name', sa.String(120), nullable=False),
        sa.Column('level', sa.String(64), nullable=False),
    ],
    'projects': [
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('technologies', sa.String(512), nullable=False),
        sa.Column('link', sa.String(1024), nullable=False),
    ],
    'certifications': [
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('issuer', sa.String(255), nullable=False),
        sa.Column('date', sa.String(64), nullable=False),
        sa.Column('link', sa.String(1024), nullable=False),
    ],
}


def _keyed():
    return [
        sa.Column('id', sa.String(32), primary_key=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        *_keyed(),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('name', sa.String(255)),
        sa.Column('first_name', sa.String(120)),
        sa.Column('last_name', sa.String(120)),
        sa.Column('picture', sa.String(1024)),
        sa.Column('provider', sa.String(32), nullable=False),
        sa.Column('password_hash', sa.String(255)),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'resumes',
        *_keyed(),
        sa.Column('user_id', sa.String(64), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('template', sa.String(64), nullable=False),
    )
    op.create_index('ix_resumes_user_id', 'resumes', ['user_id'])
    op.create_index('ix_resumes_updated_at', 'resumes', ['updated_at'])

    op.create_table(
        'personal_info',
        *_keyed(),
        sa.Column('resume_id', sa.String(32), sa.ForeignKey('resumes.id'), nullable=False),
        sa.Column('first_name', sa.String(120)),
        sa.Column('last_name', sa.String(120)),
        sa.Column('email', sa.String(255)),
        sa.Column('phone', sa.String(64)),
        sa.Column('address', sa.String(255)),
        sa.Column('linkedin', sa.String(255)),
        sa.Column('github', sa.String(255)),
        sa.Column('website', sa.String(255)),
        sa.Column('summary', sa.Text()),
    )
    op.create_index('ix_personal_info_resume_id', 'personal_info', ['resume_id'], unique=True)

    for table, columns in ORDERED_SECTIONS.items():
        op.create_table(
            table,
            *_keyed(),
            sa.Column('resume_id', sa.String(32), sa.ForeignKey('resumes.id'), nullable=False),
            sa.Column('order_index', sa.Integer(), nullable=False),
            *columns,
        )
        op.create_index(f'ix_{table}_resume_id', table, ['resume_id'])
        op.create_index(f'ix_{table}_order_index', table, ['order_index'])


def downgrade() -> None:
    """Downgrade schema."""
    for table in reversed(list(ORDERED_SECTIONS)):
        op.drop_table(table)
    op.drop_table('personal_info')
    op.drop_table('resumes')
    op.drop_table('users')
