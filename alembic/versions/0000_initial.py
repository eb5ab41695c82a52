"""Initial schema - Fornecedor API

Revision ID: 0000_initial
Revises:
Create Date: 2026-10-19

Tables:
- fornecedores
- users, user_claims, user_roles (identity store)
"""

from alembic import op
import sqlalchemy as sa

revision = '0000_initial'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # =========================================================================
    # FORNECEDORES
    # =========================================================================

    op.create_table(
        'fornecedores',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('nome', sa.String(200), nullable=False),
        sa.Column('documento', sa.String(14), nullable=False),
        sa.Column('ativo', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_fornecedores_documento', 'fornecedores', ['documento'], unique=True)

    # =========================================================================
    # IDENTITY
    # =========================================================================

    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('normalized_email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('email_confirmed', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('lockout_enabled', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('access_failed_count', sa.Integer(), server_default='0', nullable=False),
        sa.Column('lockout_end', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_normalized_email', 'users', ['normalized_email'], unique=True)

    op.create_table(
        'user_claims',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('claim_type', sa.String(255), nullable=False),
        sa.Column('claim_value', sa.String(1024), server_default='', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'claim_type', 'claim_value', name='uq_user_claims_user_type_value'),
    )
    op.create_index('ix_user_claims_user_id', 'user_claims', ['user_id'])

    op.create_table(
        'user_roles',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('role', sa.String(100), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'role', name='uq_user_roles_user_role'),
    )
    op.create_index('ix_user_roles_user_id', 'user_roles', ['user_id'])


def downgrade():
    op.drop_index('ix_user_roles_user_id', table_name='user_roles')
    op.drop_table('user_roles')
    op.drop_index('ix_user_claims_user_id', table_name='user_claims')
    op.drop_table('user_claims')
    op.drop_index('ix_users_normalized_email', table_name='users')
    op.drop_table('users')
    op.drop_index('ix_fornecedores_documento', table_name='fornecedores')
    op.drop_table('fornecedores')
