"""create appointments

Revision ID: 0001
Revises:
Create Date: 2024-06-01 00:00:00
"""
from alembic import op
import sqlalchemy as sa

from clinic_booking.models.appointments import (
    NO_OVERLAP_INSERT_TRIGGER,
    NO_OVERLAP_UPDATE_TRIGGER,
)

revision = '0001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'appointments',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('phoneNumber', sa.Text(), nullable=False),
        sa.Column('service', sa.Text(), nullable=False),
        sa.Column('start', sa.Text(), nullable=False),
        sa.Column('end', sa.Text(), nullable=False),
        sa.Column('createdAt', sa.Text(), server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updatedAt', sa.Text(), server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.CheckConstraint(
            "service IN ('consultation', 'treatment', 'extraction', 'prosthetics')",
            name='ck_appointments_service',
        ),
        sa.CheckConstraint('start < "end"', name='ck_appointments_interval'),
    )
    op.create_index('ix_appointments_start', 'appointments', ['start'])

    if op.get_bind().dialect.name == 'sqlite':
        op.execute(NO_OVERLAP_INSERT_TRIGGER)
        op.execute(NO_OVERLAP_UPDATE_TRIGGER)


def downgrade():
    if op.get_bind().dialect.name == 'sqlite':
        op.execute('DROP TRIGGER IF EXISTS appointments_no_overlap_update')
        op.execute('DROP TRIGGER IF EXISTS appointments_no_overlap_insert')
    op.drop_index('ix_appointments_start', table_name='appointments')
    op.drop_table('appointments')
