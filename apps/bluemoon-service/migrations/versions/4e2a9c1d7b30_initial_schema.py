"""initial schema

Revision ID: 4e2a9c1d7b30
Revises:
Create Date: 2025-10-01 09:12:44.310552

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '4e2a9c1d7b30'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id_column():
    return sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()'))


def _timestamps():
    return [
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=True),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        _id_column(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=20), server_default='staff', nullable=False),
        *_timestamps(),
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    # households.household_head_id is added after residents exists
    op.create_table(
        'households',
        _id_column(),
        sa.Column('household_code', sa.String(length=50), nullable=False),
        sa.Column('apartment_number', sa.String(length=50), nullable=False),
        sa.Column('address', sa.String(length=255), nullable=True),
        sa.Column('active', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        sa.Column('note', sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index(op.f('ix_households_household_code'), 'households', ['household_code'], unique=True)

    op.create_table(
        'residents',
        _id_column(),
        sa.Column('household_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('households.id'), nullable=True),
        sa.Column('full_name', sa.String(length=255), nullable=False),
        sa.Column('date_of_birth', sa.Date(), nullable=True),
        sa.Column('gender', sa.String(length=20), nullable=True),
        sa.Column('id_card', sa.String(length=50), nullable=True),
        sa.Column('id_card_date', sa.Date(), nullable=True),
        sa.Column('id_card_place', sa.String(length=255), nullable=True),
        sa.Column('place_of_birth', sa.String(length=255), nullable=True),
        sa.Column('nationality', sa.String(length=100), server_default='Vietnamese', nullable=True),
        sa.Column('ethnicity', sa.String(length=100), nullable=True),
        sa.Column('religion', sa.String(length=100), nullable=True),
        sa.Column('occupation', sa.String(length=255), nullable=True),
        sa.Column('workplace', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=30), nullable=True),
        sa.Column('relationship_to_head', sa.String(length=100), nullable=True),
        sa.Column('move_in_date', sa.Date(), nullable=True),
        sa.Column('note', sa.Text(), nullable=True),
        sa.Column('active', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        *_timestamps(),
    )
    op.create_index('idx_residents_household_id', 'residents', ['household_id'], unique=False)

    op.add_column('households', sa.Column('household_head_id', postgresql.UUID(as_uuid=True), nullable=True))
    op.create_foreign_key(
        'fk_households_household_head_id', 'households', 'residents',
        ['household_head_id'], ['id'], ondelete='SET NULL',
    )

    op.create_table(
        'fees',
        _id_column(),
        sa.Column('fee_code', sa.String(length=50), nullable=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('type', sa.String(length=30), server_default='mandatory', nullable=False),
        sa.Column('amount', sa.Float(), server_default='0', nullable=False),
        sa.Column('due_date', sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column('start_date', sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column('end_date', sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column('mandatory', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('applicable_for', sa.String(length=255), nullable=True),
        sa.Column('active', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        *_timestamps(),
    )
    op.create_index('idx_fees_type_active', 'fees', ['type', 'active'], unique=False)

    op.create_table(
        'payments',
        _id_column(),
        sa.Column('fee_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('fees.id'), nullable=False),
        sa.Column('household_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('households.id'), nullable=False),
        sa.Column('amount', sa.Float(), server_default='0', nullable=False),
        sa.Column('payment_date', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('payer_name', sa.String(length=255), nullable=True),
        sa.Column('payer_id', sa.String(length=50), nullable=True),
        sa.Column('payer_phone', sa.String(length=30), nullable=True),
        sa.Column('receipt_number', sa.String(length=100), nullable=True),
        sa.Column('note', sa.Text(), nullable=True),
        sa.Column('collector_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('is_refunded', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('refund_date', sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column('refund_reason', sa.Text(), nullable=True),
        sa.Column('refunded_by_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id'), nullable=True),
        *_timestamps(),
    )
    op.create_index(
        'uq_payments_fee_household_live', 'payments', ['fee_id', 'household_id'],
        unique=True, postgresql_where=sa.text('NOT is_refunded'),
    )
    op.create_index('idx_payments_payment_date', 'payments', ['payment_date'], unique=False)
    op.create_index('idx_payments_household_id', 'payments', ['household_id'], unique=False)

    for table, place_column in (('temporary_residences', 'address'), ('temporary_absences', 'destination')):
        op.create_table(
            table,
            _id_column(),
            sa.Column('resident_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('residents.id'), nullable=False),
            sa.Column(place_column, sa.String(length=255), nullable=True),
            sa.Column('reason', sa.Text(), nullable=True),
            sa.Column('start_date', sa.TIMESTAMP(timezone=True), nullable=False),
            sa.Column('end_date', sa.TIMESTAMP(timezone=True), nullable=False),
            sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=True),
        )
        op.create_index(f'idx_{table}_period', table, ['start_date', 'end_date'], unique=False)

    op.create_table(
        'audit_logs',
        _id_column(),
        sa.Column('actor_user_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('action_type', sa.Text(), nullable=False),
        sa.Column('target_type', sa.Text(), nullable=True),
        sa.Column('target_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('status', sa.Text(), nullable=False),
        sa.Column('metadata', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
    )
    op.create_index(op.f('ix_audit_logs_actor_user_id_created_at'), 'audit_logs', ['actor_user_id', 'created_at'], unique=False)
    op.create_index(op.f('ix_audit_logs_action_type'), 'audit_logs', ['action_type'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_audit_logs_action_type'), table_name='audit_logs')
    op.drop_index(op.f('ix_audit_logs_actor_user_id_created_at'), table_name='audit_logs')
    op.drop_table('audit_logs')
    for table in ('temporary_absences', 'temporary_residences'):
        op.drop_index(f'idx_{table}_period', table_name=table)
        op.drop_table(table)
    op.drop_index('idx_payments_household_id', table_name='payments')
    op.drop_index('idx_payments_payment_date', table_name='payments')
    op.drop_index('uq_payments_fee_household_live', table_name='payments')
    op.drop_table('payments')
    op.drop_index('idx_fees_type_active', table_name='fees')
    op.drop_table('fees')
    op.drop_constraint('fk_households_household_head_id', 'households', type_='foreignkey')
    op.drop_index('idx_residents_household_id', table_name='residents')
    op.drop_table('residents')
    op.drop_index(op.f('ix_households_household_code'), table_name='households')
    op.drop_table('households')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_table('users')
