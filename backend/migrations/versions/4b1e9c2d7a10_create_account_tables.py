"""create adopter and breeder account tables

Revision ID: 4b1e9c2d7a10
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""
import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = '4b1e9c2d7a10'
down_revision = None
branch_labels = None
depends_on = None


def _enum(name, *values):
    return sa.Enum(*values, name=name, native_enum=False, create_constraint=True, length=32)


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade():
    op.create_table(
        'adopters',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=True),
        sa.Column('full_name', sa.String(length=100), nullable=False),
        sa.Column('nickname', sa.String(length=50), nullable=False),
        sa.Column('phone', sa.String(length=30), nullable=True),
        sa.Column('profile_image_url', sa.String(length=500), nullable=True),
        sa.Column('auth_provider', _enum('enum_adopter_auth_provider', 'google', 'naver', 'kakao'), nullable=True),
        sa.Column('provider_user_id', sa.String(length=128), nullable=True),
        sa.Column('provider_email', sa.String(length=254), nullable=True),
        sa.Column('refresh_token', sa.String(length=255), nullable=True),
        sa.Column('last_activity_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            'account_status',
            _enum('enum_adopter_account_status', 'active', 'suspended', 'deleted'),
            nullable=False,
        ),
        sa.Column('marketing_agreed', sa.Boolean(), nullable=False),
        sa.Column('notification_settings', sa.JSON(), nullable=False),
        sa.Column('favorite_breeders', sa.JSON(), nullable=False),
        sa.Column('adoption_applications', sa.JSON(), nullable=False),
        sa.Column('written_reviews', sa.JSON(), nullable=False),
        sa.Column('submitted_reports', sa.JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_adopters'),
        sa.UniqueConstraint('email', name='uq_adopters_email'),
        sa.UniqueConstraint('nickname', name='uq_adopters_nickname'),
        sa.UniqueConstraint('auth_provider', 'provider_user_id', name='uq_adopters_auth_provider_user'),
    )
    op.create_index('ix_adopters_provider_user_id', 'adopters', ['provider_user_id'])

    op.create_table(
        'breeders',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('breeder_name', sa.String(length=100), nullable=True),
        sa.Column('phone', sa.String(length=30), nullable=True),
        sa.Column('profile_image_url', sa.String(length=500), nullable=True),
        sa.Column('introduction', sa.Text(), nullable=True),
        sa.Column('city', sa.String(length=50), nullable=True),
        sa.Column('district', sa.String(length=50), nullable=True),
        sa.Column('pet_type', _enum('enum_breeder_pet_type', 'cat', 'dog'), nullable=True),
        sa.Column('breeds', sa.JSON(), nullable=False),
        sa.Column('marketing_agreed', sa.Boolean(), nullable=False),
        sa.Column('social_provider', _enum('enum_breeder_social_provider', 'google', 'naver', 'kakao'), nullable=True),
        sa.Column('social_provider_id', sa.String(length=128), nullable=True),
        sa.Column('social_email', sa.String(length=254), nullable=True),
        sa.Column('refresh_token', sa.String(length=255), nullable=True),
        sa.Column('last_login_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            'account_status',
            _enum('enum_breeder_account_status', 'active', 'suspended', 'deleted'),
            nullable=False,
        ),
        sa.Column(
            'verification_status',
            _enum('enum_verification_status', 'pending', 'reviewing', 'approved', 'rejected'),
            nullable=False,
        ),
        sa.Column('verification_plan', _enum('enum_verification_plan', 'basic', 'pro'), nullable=False),
        sa.Column('verification_level', _enum('enum_breeder_level', 'new', 'elite'), nullable=False),
        sa.Column('verification_documents', sa.JSON(), nullable=False),
        sa.Column('verification_submitted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('verification_reviewed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('verification_rejection_reason', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_breeders'),
        sa.UniqueConstraint('email', name='uq_breeders_email'),
        sa.UniqueConstraint('social_provider', 'social_provider_id', name='uq_breeders_social_provider_id'),
    )
    op.create_index('ix_breeders_social_provider_id', 'breeders', ['social_provider_id'])


def downgrade():
    op.drop_index('ix_breeders_social_provider_id', table_name='breeders')
    op.drop_table('breeders')
    op.drop_index('ix_adopters_provider_user_id', table_name='adopters')
    op.drop_table('adopters')
