"""004: create positions table

Revision ID: 004
Revises: 003
Create Date: 2026-10-12
"""
from typing import Sequence, Union
from alembic import op

revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE positions (
            user_id             VARCHAR(64)     NOT NULL,
            symbol              VARCHAR(20)     NOT NULL REFERENCES symbols (symbol),
            shares_owned        INT             NOT NULL,
            average_cost_basis  NUMERIC(15,4)   NOT NULL,
            created_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT pk_positions                 PRIMARY KEY (user_id, symbol),
            CONSTRAINT ck_positions_shares_gt_0     CHECK (shares_owned > 0),
            CONSTRAINT ck_positions_avg_cost_gte_0  CHECK (average_cost_basis >= 0)
        );
    """)
    op.execute("""
        CREATE TRIGGER trg_positions_updated_at
            BEFORE UPDATE ON positions
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute("COMMENT ON TABLE positions IS 'Open holdings; a fully sold position is deleted';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS positions CASCADE;")
