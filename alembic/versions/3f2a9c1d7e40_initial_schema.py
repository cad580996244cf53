"""Initial schema

Revision ID: 3f2a9c1d7e40
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '3f2a9c1d7e40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Enum columns store member names
ENUMS = {
    'user_role_enum': ('ADMIN', 'MEMBER', 'MANAGER', 'AUTHENTICATOR'),
    'user_status_enum': ('ACTIVE', 'INACTIVE', 'PENDING'),
    'payment_method_enum': ('PAY_NOW', 'PAY_LATER', 'INVOICE'),
    'payment_status_enum': ('PAID', 'PENDING'),
    'booking_status_enum': ('PENDING', 'AWAITING_PAYMENT', 'CONFIRMED', 'REJECTED', 'COMPLETED', 'CANCELLED'),
    'invoice_status_enum': ('PENDING', 'PAID', 'CANCELLED'),
    'visit_status_enum': ('PENDING', 'CONFIRMED', 'COMPLETED', 'CANCELLED'),
    'request_status_enum': ('PENDING', 'REVIEWED', 'COMPLETED'),
    'day_pass_status_enum': ('PENDING', 'USED', 'EXPIRED'),
}


def _enum(name: str) -> postgresql.ENUM:
    return postgresql.ENUM(*ENUMS[name], name=name, create_type=False)


def _timestamps() -> list:
    return [
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    ]


def upgrade() -> None:
    bind = op.get_bind()
    for name, values in ENUMS.items():
        postgresql.ENUM(*values, name=name).create(bind, checkfirst=True)

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('mobile', sa.String(), nullable=True),
        sa.Column('organization', sa.String(), nullable=True),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('role', _enum('user_role_enum'), nullable=False),
        sa.Column('status', _enum('user_status_enum'), nullable=False),
        sa.Column('joined_date', sa.String(), nullable=True),
        sa.Column('last_active', sa.String(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint('mobile'),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_status', 'users', ['status'])
    op.create_index('ix_users_created_at', 'users', ['created_at'])

    op.create_table(
        'workspaces',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('location', sa.String(), nullable=False),
        sa.Column('floor', sa.String(), nullable=True),
        sa.Column('type', sa.String(), nullable=False),
        sa.Column('capacity', sa.String(), nullable=False),
        sa.Column('base_price', sa.Numeric(12, 2), nullable=False),
        sa.Column('price_label', sa.String(), nullable=True),
        sa.Column('amenities', sa.JSON(), nullable=True),
        sa.Column('images', sa.JSON(), nullable=True),
        sa.Column('featured', sa.Boolean(), nullable=True),
        sa.Column('has_conference_hall', sa.Boolean(), nullable=True),
        sa.Column('has_cabin', sa.Boolean(), nullable=True),
        sa.Column('allotted_to_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('allotment_start', sa.DateTime(), nullable=True),
        sa.Column('allotment_end', sa.DateTime(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_workspaces_id', 'workspaces', ['id'])
    op.create_index('ix_workspaces_name', 'workspaces', ['name'])
    op.create_index('ix_workspaces_location', 'workspaces', ['location'])
    op.create_index('ix_workspaces_allotted_to_id', 'workspaces', ['allotted_to_id'])
    op.create_index('ix_workspaces_created_at', 'workspaces', ['created_at'])

    op.create_table(
        'booking_requests',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('workspace_id', sa.Integer(), sa.ForeignKey('workspaces.id', ondelete='SET NULL'), nullable=True),
        sa.Column('workspace_name', sa.String(), nullable=False),
        sa.Column('full_name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('contact_number', sa.String(), nullable=False),
        sa.Column('firm_name', sa.String(), nullable=True),
        sa.Column('duration', sa.String(), nullable=False),
        sa.Column('start_date', sa.DateTime(), nullable=False),
        sa.Column('end_date', sa.DateTime(), nullable=False),
        sa.Column('total_amount', sa.Integer(), nullable=False),
        sa.Column('payment_method', _enum('payment_method_enum'), nullable=False),
        sa.Column('payment_status', _enum('payment_status_enum'), nullable=False),
        sa.Column('status', _enum('booking_status_enum'), nullable=False),
        sa.Column('invoice_number', sa.String(), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint('invoice_number'),
    )
    op.create_index('ix_booking_requests_id', 'booking_requests', ['id'])
    op.create_index('ix_booking_requests_workspace_id', 'booking_requests', ['workspace_id'])
    op.create_index('ix_booking_requests_email', 'booking_requests', ['email'])
    op.create_index('ix_booking_requests_status', 'booking_requests', ['status'])
    op.create_index('ix_booking_requests_created_at', 'booking_requests', ['created_at'])

    op.create_table(
        'invoices',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('invoice_number', sa.String(), nullable=False),
        sa.Column('booking_id', sa.Integer(), sa.ForeignKey('booking_requests.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('customer_name', sa.String(), nullable=False),
        sa.Column('customer_email', sa.String(), nullable=False),
        sa.Column('workspace_name', sa.String(), nullable=False),
        sa.Column('amount', sa.Integer(), nullable=False),
        sa.Column('payment_method', _enum('payment_method_enum'), nullable=False),
        sa.Column('status', _enum('invoice_status_enum'), nullable=False),
        sa.Column('due_date', sa.DateTime(), nullable=True),
        sa.Column('paid_date', sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint('booking_id'),
    )
    op.create_index('ix_invoices_id', 'invoices', ['id'])
    op.create_index('ix_invoices_invoice_number', 'invoices', ['invoice_number'], unique=True)
    op.create_index('ix_invoices_customer_email', 'invoices', ['customer_email'])
    op.create_index('ix_invoices_created_at', 'invoices', ['created_at'])

    op.create_table(
        'visit_requests',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('workspace_id', sa.Integer(), sa.ForeignKey('workspaces.id', ondelete='SET NULL'), nullable=True),
        sa.Column('workspace_name', sa.String(), nullable=False),
        sa.Column('full_name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('contact_number', sa.String(), nullable=False),
        sa.Column('visit_date', sa.DateTime(), nullable=False),
        sa.Column('status', _enum('visit_status_enum'), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_visit_requests_id', 'visit_requests', ['id'])
    op.create_index('ix_visit_requests_created_at', 'visit_requests', ['created_at'])

    op.create_table(
        'quote_requests',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('full_name', sa.String(), nullable=False),
        sa.Column('work_email', sa.String(), nullable=False),
        sa.Column('contact_number', sa.String(), nullable=False),
        sa.Column('firm_name', sa.String(), nullable=False),
        sa.Column('firm_type', sa.String(), nullable=False),
        sa.Column('required_workspace', sa.String(), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=False),
        sa.Column('start_date', sa.DateTime(), nullable=False),
        sa.Column('duration', sa.String(), nullable=False),
        sa.Column('additional_requirements', sa.Text(), nullable=True),
        sa.Column('status', _enum('request_status_enum'), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_quote_requests_id', 'quote_requests', ['id'])
    op.create_index('ix_quote_requests_status', 'quote_requests', ['status'])
    op.create_index('ix_quote_requests_created_at', 'quote_requests', ['created_at'])

    op.create_table(
        'contact_requests',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('subject', sa.String(), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('status', _enum('request_status_enum'), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_contact_requests_id', 'contact_requests', ['id'])
    op.create_index('ix_contact_requests_created_at', 'contact_requests', ['created_at'])

    op.create_table(
        'day_passes',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('contact', sa.String(), nullable=False),
        sa.Column('purpose', sa.String(), nullable=False),
        sa.Column('visit_date', sa.DateTime(), nullable=False),
        sa.Column('pass_code', sa.String(), nullable=False),
        sa.Column('status', _enum('day_pass_status_enum'), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_day_passes_id', 'day_passes', ['id'])
    op.create_index('ix_day_passes_pass_code', 'day_passes', ['pass_code'], unique=True)
    op.create_index('ix_day_passes_created_at', 'day_passes', ['created_at'])

    op.create_table(
        'posts',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('author_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('author_name', sa.String(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('upvotes', sa.JSON(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_posts_id', 'posts', ['id'])
    op.create_index('ix_posts_author_id', 'posts', ['author_id'])
    op.create_index('ix_posts_created_at', 'posts', ['created_at'])

    op.create_table(
        'post_comments',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('post_id', sa.Integer(), sa.ForeignKey('posts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_name', sa.String(), nullable=False),
        sa.Column('text', sa.Text(), nullable=False),
        sa.Column('upvotes', sa.JSON(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_post_comments_id', 'post_comments', ['id'])
    op.create_index('ix_post_comments_post_id', 'post_comments', ['post_id'])
    op.create_index('ix_post_comments_created_at', 'post_comments', ['created_at'])

    op.create_table(
        'comment_replies',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('comment_id', sa.Integer(), sa.ForeignKey('post_comments.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_name', sa.String(), nullable=False),
        sa.Column('text', sa.Text(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_comment_replies_id', 'comment_replies', ['id'])
    op.create_index('ix_comment_replies_comment_id', 'comment_replies', ['comment_id'])
    op.create_index('ix_comment_replies_created_at', 'comment_replies', ['created_at'])


def downgrade() -> None:
    for table in (
        'comment_replies', 'post_comments', 'posts', 'day_passes', 'contact_requests',
        'quote_requests', 'visit_requests', 'invoices', 'booking_requests', 'workspaces', 'users',
    ):
        op.drop_table(table)
    bind = op.get_bind()
    for name in ENUMS:
        postgresql.ENUM(name=name).drop(bind, checkfirst=True)
