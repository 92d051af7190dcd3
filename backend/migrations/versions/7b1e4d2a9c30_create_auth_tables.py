"""create customers, restaurants, staff and refresh tokens

Revision ID: 7b1e4d2a9c30
Revises:
Create Date: 2025-01-15 00:00:00.000000
"""
import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = '7b1e4d2a9c30'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def _profile():
    return [
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('address', sa.String(length=100), nullable=False),
        sa.Column('city', sa.String(length=100), nullable=False),
        sa.Column('postal_code', sa.String(length=32), nullable=False),
        sa.Column('country_code', sa.String(length=2), nullable=False),
    ]


def upgrade():
    op.create_table(
        'customers',
        sa.Column('id', sa.String(length=24), nullable=False),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        *_profile(),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_customers')),
        sa.UniqueConstraint('email', name='uq_customers_email'),
    )
    op.create_table(
        'restaurants',
        sa.Column('id', sa.String(length=24), nullable=False),
        sa.Column('vat_code', sa.String(length=40), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('legal_name', sa.String(length=100), nullable=False),
        sa.Column('tax_id', sa.String(length=40), nullable=False),
        sa.Column('timezone_id', sa.String(length=64), nullable=False),
        sa.Column('contact_phone_prefix', sa.String(length=5), nullable=False),
        sa.Column('contact_phone_number', sa.String(length=14), nullable=False),
        sa.Column('contact_email', sa.String(length=254), nullable=False),
        sa.Column('contact_address', sa.String(length=100), nullable=False),
        sa.Column('contact_city', sa.String(length=100), nullable=False),
        sa.Column('contact_postal_code', sa.String(length=32), nullable=False),
        sa.Column('contact_country_code', sa.String(length=2), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_restaurants')),
        sa.UniqueConstraint('vat_code', name='uq_restaurants_vat_code'),
    )
    op.create_table(
        'staff',
        sa.Column('id', sa.String(length=24), nullable=False),
        sa.Column('restaurant_id', sa.String(length=24), nullable=False),
        sa.Column('owner', sa.Boolean(), nullable=False),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        *_profile(),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ['restaurant_id'],
            ['restaurants.id'],
            name=op.f('fk_staff_restaurant_id_restaurants'),
            ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_staff')),
        sa.UniqueConstraint('email', 'restaurant_id', name='uq_staff_email_restaurant'),
    )
    with op.batch_alter_table('staff', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_staff_restaurant_id'), ['restaurant_id'], unique=False)

    op.create_table(
        'refresh_tokens',
        sa.Column('id', sa.String(length=24), nullable=False),
        sa.Column('user_id', sa.String(length=24), nullable=False),
        sa.Column('role', sa.String(length=16), nullable=False),
        sa.Column('tenant_id', sa.String(length=24), nullable=False),
        sa.Column('token', sa.String(length=128), nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False),
        sa.Column('device_id', sa.String(length=64), nullable=False),
        sa.Column('user_agent', sa.String(length=512), nullable=False),
        sa.Column('ip', sa.String(length=64), nullable=False),
        sa.Column('first_used_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('last_used_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_refresh_tokens')),
        sa.UniqueConstraint('token', name='uq_refresh_tokens_token'),
    )
    with op.batch_alter_table('refresh_tokens', schema=None) as batch_op:
        batch_op.create_index('ix_refresh_tokens_user_id_status', ['user_id', 'status'], unique=False)


def downgrade():
    with op.batch_alter_table('refresh_tokens', schema=None) as batch_op:
        batch_op.drop_index('ix_refresh_tokens_user_id_status')
    op.drop_table('refresh_tokens')
    with op.batch_alter_table('staff', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_staff_restaurant_id'))
    op.drop_table('staff')
    op.drop_table('restaurants')
    op.drop_table('customers')
