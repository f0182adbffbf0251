"""initial schema: directory, campus locations, pending approvals

Revision ID: 0001_initial_schema
Revises:
Create Date: 2025-12-26 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

EMAIL_REGEX = r"^[^@]+@[^@]+\.[^@]+$"


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    is_postgres = op.get_bind().dialect.name == 'postgresql'

    op.create_table(
        'clubs',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('faculty_coordinator', sa.Text(), nullable=False),
        sa.Column('faculty_email', sa.Text(), nullable=True),
        sa.Column('recruitment_open', sa.Boolean(), nullable=True),
        sa.Column('recruitment_info', sa.Text(), nullable=True),
        sa.Column('logo_url', sa.Text(), nullable=True),
        sa.Column('status', sa.String(16), nullable=False, server_default='pending'),
        sa.Column('approval_token', sa.String(36), nullable=True),
        sa.Column('submitted_by', sa.String(64), nullable=True),
        *_timestamps(),
        sa.CheckConstraint('length(name) <= 200', name=op.f('ck_clubs_club_name_length')),
        sa.CheckConstraint('length(description) <= 2000', name=op.f('ck_clubs_club_description_length')),
        sa.CheckConstraint('length(faculty_coordinator) <= 200', name=op.f('ck_clubs_faculty_coordinator_length')),
        sa.CheckConstraint('length(recruitment_info) <= 2000', name=op.f('ck_clubs_recruitment_info_length')),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_clubs')),
    )

    op.create_table(
        'shops',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('location', sa.Text(), nullable=True),
        sa.Column('contact', sa.Text(), nullable=True),
        sa.Column('category', sa.Text(), nullable=True),
        sa.Column('image_url', sa.Text(), nullable=True),
        sa.Column('status', sa.String(16), nullable=False, server_default='pending'),
        sa.Column('approval_token', sa.String(36), nullable=True),
        sa.Column('submitted_by', sa.String(64), nullable=True),
        *_timestamps(),
        sa.CheckConstraint('length(name) <= 200', name=op.f('ck_shops_shop_name_length')),
        sa.CheckConstraint('length(description) <= 2000', name=op.f('ck_shops_shop_description_length')),
        sa.CheckConstraint('length(location) <= 200', name=op.f('ck_shops_shop_location_length')),
        sa.CheckConstraint('length(contact) <= 200', name=op.f('ck_shops_shop_contact_length')),
        sa.CheckConstraint('length(category) <= 100', name=op.f('ck_shops_category_length')),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_shops')),
    )

    op.create_table(
        'campus_locations',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('category', sa.String(32), nullable=False, server_default='other'),
        sa.Column('latitude', sa.Float(), nullable=False),
        sa.Column('longitude', sa.Float(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('floor_info', sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint('length(name) <= 200', name=op.f('ck_campus_locations_location_name_length')),
        sa.CheckConstraint('length(description) <= 2000', name=op.f('ck_campus_locations_location_description_length')),
        sa.CheckConstraint('length(floor_info) <= 100', name=op.f('ck_campus_locations_floor_info_length')),
        sa.CheckConstraint('latitude >= -90 AND latitude <= 90', name=op.f('ck_campus_locations_latitude_range')),
        sa.CheckConstraint('longitude >= -180 AND longitude <= 180', name=op.f('ck_campus_locations_longitude_range')),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_campus_locations')),
    )

    op.create_table(
        'pending_approvals',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('item_type', sa.String(16), nullable=False),
        sa.Column('item_id', sa.String(36), nullable=False),
        sa.Column('submitted_by', sa.String(64), nullable=False),
        sa.Column('faculty_email', sa.String(255), nullable=False, server_default='pending'),
        sa.Column('approval_token', sa.String(36), nullable=False),
        sa.Column('status', sa.String(16), nullable=False, server_default='pending'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("item_type IN ('shop', 'club')", name=op.f('ck_pending_approvals_approval_item_type')),
        sa.CheckConstraint(
            "status IN ('pending', 'approved', 'rejected')", name=op.f('ck_pending_approvals_approval_status')
        ),
        sa.UniqueConstraint('approval_token', name=op.f('uq_pending_approvals_approval_token')),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_pending_approvals')),
    )
    op.create_index(op.f('ix_pending_approvals_item_id'), 'pending_approvals', ['item_id'])

    if is_postgres:
        op.create_check_constraint(
            op.f('ck_clubs_faculty_email_format'),
            'clubs',
            f"faculty_email IS NULL OR faculty_email ~ '{EMAIL_REGEX}'",
        )
        op.create_check_constraint(
            op.f('ck_pending_approvals_approval_faculty_email_format'),
            'pending_approvals',
            f"faculty_email = 'pending' OR faculty_email ~ '{EMAIL_REGEX}'",
        )


def downgrade() -> None:
    op.drop_index(op.f('ix_pending_approvals_item_id'), table_name='pending_approvals')
    op.drop_table('pending_approvals')
    op.drop_table('campus_locations')
    op.drop_table('shops')
    op.drop_table('clubs')
