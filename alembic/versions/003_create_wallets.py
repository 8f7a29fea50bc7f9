"""003: create wallets table

Revision ID: 003
Revises: 002
Create Date: 2026-10-12
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE wallets (
            user_id         VARCHAR(64)     PRIMARY KEY,
            cash_balance    NUMERIC(15,2)   NOT NULL DEFAULT 0,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_wallets_cash_gte_0 CHECK (cash_balance >= 0)
        );
    """)
    op.execute("""
        CREATE TRIGGER trg_wallets_updated_at
            BEFORE UPDATE ON wallets
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute("COMMENT ON TABLE wallets IS 'Cash balance per user, in dollars (2 dp)';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS wallets CASCADE;")
