"""
Initial CMS schema.

Creates content_blocks, team_members, schools and school_enrollments with
their ordering indexes, enum CHECK constraints and the one-record-per-year
unique constraint on enrollments.
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision = 'cms_initial_20251019'
down_revision = None
branch_labels = None
depends_on = None

# Frozen copy of the grade layout at the time of this revision
_GRADE_LEVELS = (
    "nursery1", "nursery2", "nursery3",
    "kg1", "kg2",
    "primary1", "primary2", "primary3", "primary4", "primary5", "primary6",
    "jss1", "jss2", "jss3",
    "ss1", "ss2", "ss3",
)


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
    ]


def upgrade() -> None:
    op.create_table(
        'content_blocks',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('content_key', sa.String(100), nullable=False, unique=True),
        sa.Column('content_type', sa.String(20), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('subtitle', sa.String(255), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('content', postgresql.JSONB(), nullable=False),
        sa.Column('image_url', sa.String(1024), nullable=True),
        sa.Column('image_public_id', sa.String(255), nullable=True),
        sa.Column('gallery_urls', postgresql.JSONB(), nullable=True),
        sa.Column('gallery_public_ids', postgresql.JSONB(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('metadata', postgresql.JSONB(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "content_type in ('gallery','image','person','section','text')",
            name='ck_content_blocks_content_type',
        ),
    )
    op.create_index('idx_content_blocks_content_type', 'content_blocks', ['content_type'])
    op.create_index('idx_content_blocks_active_sort', 'content_blocks', ['is_active', 'sort_order'])

    op.create_table(
        'team_members',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('first_name', sa.String(100), nullable=False),
        sa.Column('last_name', sa.String(100), nullable=False),
        sa.Column('position', sa.String(255), nullable=False),
        sa.Column('department', sa.String(255), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('linkedin_url', sa.String(1024), nullable=True),
        sa.Column('twitter_url', sa.String(1024), nullable=True),
        sa.Column('profile_image_url', sa.String(1024), nullable=True),
        sa.Column('profile_image_public_id', sa.String(255), nullable=True),
        sa.Column('category', sa.String(20), nullable=False, server_default='staff'),
        sa.Column('role', sa.String(30), nullable=False, server_default='member'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('is_featured', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('joined_date', sa.Date(), nullable=True),
        sa.Column('achievements', postgresql.JSONB(), nullable=True),
        sa.Column('qualifications', postgresql.JSONB(), nullable=True),
        sa.Column('years_of_experience', sa.Integer(), nullable=True),
        sa.Column('specialization', sa.String(255), nullable=True),
        sa.Column('metadata', postgresql.JSONB(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "category in ('advisory','board','executive','leadership','staff')",
            name='ck_team_members_category',
        ),
        sa.CheckConstraint(
            "role in ('coordinator','director','elder','manager','member','president','secretary','treasurer','vice_president')",
            name='ck_team_members_role',
        ),
    )
    op.create_index('idx_team_members_category', 'team_members', ['category'])
    op.create_index('idx_team_members_role', 'team_members', ['role'])
    op.create_index('idx_team_members_active_sort', 'team_members', ['is_active', 'sort_order'])
    op.create_index('idx_team_members_is_featured', 'team_members', ['is_featured'])

    op.create_table(
        'schools',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('school_name', sa.String(255), nullable=False),
        sa.Column('address', sa.String(500), nullable=False),
        sa.Column('lga', sa.String(100), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index('idx_schools_school_name', 'schools', ['school_name'])

    counters = [
        sa.Column(f'{level}_{gender}', sa.Integer(), nullable=False, server_default='0')
        for level in _GRADE_LEVELS
        for gender in ('male', 'female')
    ]
    op.create_table(
        'school_enrollments',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            'school_id',
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey('schools.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('academic_year', sa.String(20), nullable=False, server_default='2024/2025'),
        *counters,
        sa.Column('pupils_presented_2023', sa.Integer(), nullable=False, server_default='0'),
        *_timestamps(),
        sa.UniqueConstraint('school_id', 'academic_year', name='uq_school_enrollments_school_year'),
    )
    op.create_index('idx_school_enrollments_academic_year', 'school_enrollments', ['academic_year'])


def downgrade() -> None:
    op.drop_index('idx_school_enrollments_academic_year', table_name='school_enrollments')
    op.drop_table('school_enrollments')
    op.drop_index('idx_schools_school_name', table_name='schools')
    op.drop_table('schools')
    for name in (
        'idx_team_members_is_featured',
        'idx_team_members_active_sort',
        'idx_team_members_role',
        'idx_team_members_category',
    ):
        op.drop_index(name, table_name='team_members')
    op.drop_table('team_members')
    op.drop_index('idx_content_blocks_active_sort', table_name='content_blocks')
    op.drop_index('idx_content_blocks_content_type', table_name='content_blocks')
    op.drop_table('content_blocks')
