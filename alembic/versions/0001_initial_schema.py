"""Initial schema: donors, donations, needy persons, sms logs

Revision ID: 0001_initial
Revises: 
Create Date: 2026-10-17 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '0001_initial'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'donors',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('email', sa.String(length=320), nullable=False),
        sa.Column('phone', sa.String(length=32), nullable=False),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('city', sa.String(length=128), nullable=True),
        sa.Column('state', sa.String(length=128), nullable=True),
        sa.Column('pincode', sa.String(length=16), nullable=True),
        sa.Column('pan', sa.String(length=16), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_donors_email'), 'donors', ['email'], unique=True)
    op.create_index(op.f('ix_donors_city'), 'donors', ['city'], unique=False)

    op.create_table(
        'item_donations',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('donor_id', sa.Uuid(), nullable=False),
        sa.Column('category', sa.String(length=64), nullable=False),
        sa.Column('condition', sa.String(length=64), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('quantity', sa.String(length=64), nullable=True),
        sa.Column('pickup_date', sa.String(length=32), nullable=True),
        sa.Column('pickup_time_slot', sa.String(length=32), nullable=True),
        sa.Column('pickup_instructions', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=32), nullable=False, server_default='pending'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.ForeignKeyConstraint(['donor_id'], ['donors.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_item_donations_donor_id'), 'item_donations', ['donor_id'], unique=False)

    op.create_table(
        'monetary_donations',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('donor_id', sa.Uuid(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('purpose', sa.String(length=64), nullable=False),
        sa.Column('message', sa.Text(), nullable=True),
        sa.Column('stripe_payment_intent_id', sa.String(length=255), nullable=True),
        sa.Column('status', sa.String(length=32), nullable=False, server_default='pending'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.ForeignKeyConstraint(['donor_id'], ['donors.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_monetary_donations_donor_id'), 'monetary_donations', ['donor_id'], unique=False)
    op.create_index('uq_monetary_donations_payment_intent', 'monetary_donations', ['stripe_payment_intent_id'], unique=True)

    op.create_table(
        'needy_persons',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('age', sa.Integer(), nullable=False),
        sa.Column('gender', sa.String(length=16), nullable=False),
        sa.Column('phone', sa.String(length=32), nullable=True),
        sa.Column('family_size', sa.Integer(), nullable=True),
        sa.Column('address', sa.Text(), nullable=False),
        sa.Column('city', sa.String(length=128), nullable=False),
        sa.Column('state', sa.String(length=128), nullable=False),
        sa.Column('pincode', sa.String(length=16), nullable=False),
        sa.Column('needs', sa.JSON(), nullable=False),
        sa.Column('situation', sa.Text(), nullable=False),
        sa.Column('income', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('reporter_name', sa.Text(), nullable=False),
        sa.Column('reporter_phone', sa.String(length=32), nullable=False),
        sa.Column('reporter_email', sa.String(length=320), nullable=False),
        sa.Column('reporter_relationship', sa.String(length=64), nullable=False),
        sa.Column('verified', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('status', sa.String(length=32), nullable=False, server_default='pending'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'sms_logs',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('phone', sa.String(length=32), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False),
        sa.Column('twilio_sid', sa.String(length=64), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )


def downgrade() -> None:
    op.drop_table('sms_logs')
    op.drop_table('needy_persons')
    op.drop_index('uq_monetary_donations_payment_intent', table_name='monetary_donations')
    op.drop_index(op.f('ix_monetary_donations_donor_id'), table_name='monetary_donations')
    op.drop_table('monetary_donations')
    op.drop_index(op.f('ix_item_donations_donor_id'), table_name='item_donations')
    op.drop_table('item_donations')
    op.drop_index(op.f('ix_donors_city'), table_name='donors')
    op.drop_index(op.f('ix_donors_email'), table_name='donors')
    op.drop_table('donors')
