"""initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID


# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Create users table
    op.create_table(
        'users',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('photo_url', sa.String(), nullable=True),
        sa.Column('role', sa.String(), nullable=False, server_default='user'),
        sa.Column('is_subscribed', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('subscription_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.CheckConstraint("role IN ('user', 'moderator', 'admin')", name='ck_user_role'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    # Create products table
    op.create_table(
        'products',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('owner_email', sa.String(), nullable=False),
        sa.Column('owner_name', sa.String(), nullable=True),
        sa.Column('owner_image', sa.String(), nullable=True),
        sa.Column('product_name', sa.String(), nullable=False),
        sa.Column('product_image', sa.String(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('tags', sa.JSON(), nullable=False, server_default='[]'),
        sa.Column('external_link', sa.String(), nullable=True),
        sa.Column('status', sa.String(), nullable=False, server_default='Pending'),
        sa.Column('is_featured', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('upvotes', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('reports', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.CheckConstraint("status IN ('Pending', 'Accepted', 'Rejected')", name='ck_product_status'),
        sa.CheckConstraint('upvotes >= 0', name='ck_product_upvotes'),
        sa.CheckConstraint('reports >= 0', name='ck_product_reports'),
    )
    op.create_index('ix_products_owner_email', 'products', ['owner_email'])
    op.create_index('ix_products_status', 'products', ['status'])
    op.create_index('ix_products_is_featured', 'products', ['is_featured'])
    op.create_index('ix_products_created_at', 'products', ['created_at'])

    # Create product_votes table
    op.create_table(
        'product_votes',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('product_id', UUID(as_uuid=True), nullable=False),
        sa.Column('voter_email', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['product_id'], ['products.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('product_id', 'voter_email', name='uq_product_voter'),
    )
    op.create_index('ix_product_votes_product_id', 'product_votes', ['product_id'])
    op.create_index('ix_product_votes_voter_email', 'product_votes', ['voter_email'])

    # Create product_reports table
    op.create_table(
        'product_reports',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('product_id', UUID(as_uuid=True), nullable=False),
        sa.Column('reporter_email', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['product_id'], ['products.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('product_id', 'reporter_email', name='uq_product_reporter'),
    )
    op.create_index('ix_product_reports_product_id', 'product_reports', ['product_id'])
    op.create_index('ix_product_reports_reporter_email', 'product_reports', ['reporter_email'])

    # Create coupons table
    op.create_table(
        'coupons',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('code', sa.String(), nullable=False),
        sa.Column('discount', sa.Float(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('expiry_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.CheckConstraint('discount >= 0 AND discount <= 100', name='ck_coupon_discount_range'),
    )
    op.create_index('ix_coupons_code', 'coupons', ['code'], unique=True)

    # Create reviews table
    op.create_table(
        'reviews',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('product_id', UUID(as_uuid=True), nullable=False),
        sa.Column('reviewer_email', sa.String(), nullable=False),
        sa.Column('reviewer_name', sa.String(), nullable=True),
        sa.Column('reviewer_image', sa.String(), nullable=True),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('comment', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['product_id'], ['products.id'], ondelete='CASCADE'),
        sa.CheckConstraint('rating >= 1 AND rating <= 5', name='ck_review_rating_range'),
    )
    op.create_index('ix_reviews_product_id', 'reviews', ['product_id'])
    op.create_index('ix_reviews_reviewer_email', 'reviews', ['reviewer_email'])
    op.create_index('ix_reviews_created_at', 'reviews', ['created_at'])


def downgrade() -> None:
    op.drop_table('reviews')
    op.drop_table('coupons')
    op.drop_table('product_reports')
    op.drop_table('product_votes')
    op.drop_table('products')
    op.drop_table('users')
