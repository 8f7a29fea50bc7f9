"""002: create symbols table

Revision ID: 002
Revises: 001
Create Date: 2026-10-12
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE symbols (
            symbol      VARCHAR(20)     PRIMARY KEY,
            name        VARCHAR(200)    NOT NULL,
            exchange    VARCHAR(80),
            currency    VARCHAR(10),
            mic         VARCHAR(20),
            enabled     BOOLEAN         NOT NULL DEFAULT TRUE,
            created_at  TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at  TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_symbols_upper CHECK (symbol = UPPER(symbol))
        );
    """)
    op.execute("CREATE INDEX idx_symbols_enabled ON symbols (enabled);")
    op.execute("""
        CREATE TRIGGER trg_symbols_updated_at
            BEFORE UPDATE ON symbols
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute("COMMENT ON TABLE symbols IS 'Tradable tickers; disabled symbols reject buys and sells';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS symbols CASCADE;")
