"""005: create transactions table

Revision ID: 005
Revises: 004
Create Date: 2026-10-12
"""
from typing import Sequence, Union
from alembic import op

revision: str = "005"
down_revision: Union[str, None] = "004"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE transactions (
            id                  BIGSERIAL       PRIMARY KEY,
            user_id             VARCHAR(64)     NOT NULL,
            symbol              VARCHAR(20)     NOT NULL REFERENCES symbols (symbol),
            type                VARCHAR(4)      NOT NULL,
            quantity            INT             NOT NULL,
            price_per_share     NUMERIC(15,2)   NOT NULL,
            total_amount        NUMERIC(15,2)   NOT NULL,
            profit_loss         NUMERIC(15,2),
            executed_at         TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_transactions_type         CHECK (type IN ('BUY', 'SELL')),
            CONSTRAINT ck_transactions_quantity_gt_0 CHECK (quantity > 0),
            CONSTRAINT ck_transactions_price_gt_0   CHECK (price_per_share > 0),
            CONSTRAINT ck_transactions_buy_no_pnl   CHECK (type = 'SELL' OR profit_loss IS NULL)
        );
    """)
    op.execute(
        "CREATE INDEX idx_transactions_user_symbol_time"
        " ON transactions (user_id, symbol, executed_at, id);"
    )
    op.execute(
        "CREATE INDEX idx_transactions_user_time"
        " ON transactions (user_id, executed_at DESC, id DESC);"
    )
    op.execute("""
        CREATE TRIGGER trg_transactions_append_only
            BEFORE UPDATE OR DELETE ON transactions
            FOR EACH ROW EXECUTE FUNCTION fn_reject_mutation();
    """)
    op.execute("COMMENT ON TABLE transactions IS 'Executed trades, append-only';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS transactions CASCADE;")
