"""Record the payment behind each subscription

Revision ID: 002
Revises: 001
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '002'
down_revision = '001'
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.add_column('users', sa.Column('subscription_payment_id', sa.String(), nullable=True))
    op.create_unique_constraint(
        'uq_users_subscription_payment_id', 'users', ['subscription_payment_id']
    )


def downgrade() -> None:
    op.drop_constraint('uq_users_subscription_payment_id', 'users', type_='unique')
    op.drop_column('users', 'subscription_payment_id')
