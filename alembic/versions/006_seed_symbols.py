"""006: seed initial symbols

Revision ID: 006
Revises: 005
Create Date: 2026-10-12
"""
from typing import Sequence, Union
from alembic import op

revision: str = "006"
down_revision: Union[str, None] = "005"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        INSERT INTO symbols (symbol, name, exchange, currency, mic, enabled) VALUES
            ('AAPL',  'Apple Inc',               'NASDAQ NMS - GLOBAL MARKET', 'USD', 'XNAS', TRUE),
            ('MSFT',  'Microsoft Corp',          'NASDAQ NMS - GLOBAL MARKET', 'USD', 'XNAS', TRUE),
            ('GOOGL', 'Alphabet Inc',            'NASDAQ NMS - GLOBAL MARKET', 'USD', 'XNAS', TRUE),
            ('AMZN',  'Amazon.com Inc',          'NASDAQ NMS - GLOBAL MARKET', 'USD', 'XNAS', TRUE),
            ('TSLA',  'Tesla Inc',               'NASDAQ NMS - GLOBAL MARKET', 'USD', 'XNAS', TRUE),
            ('NVDA',  'NVIDIA Corp',             'NASDAQ NMS - GLOBAL MARKET', 'USD', 'XNAS', TRUE),
            ('JPM',   'JPMorgan Chase & Co',     'NEW YORK STOCK EXCHANGE, INC.', 'USD', 'XNYS', TRUE),
            ('KO',    'Coca-Cola Co',            'NEW YORK STOCK EXCHANGE, INC.', 'USD', 'XNYS', TRUE)
        ON CONFLICT (symbol) DO NOTHING;
    """)


def downgrade() -> None:
    op.execute(
        "DELETE FROM symbols WHERE symbol IN"
        " ('AAPL', 'MSFT', 'GOOGL', 'AMZN', 'TSLA', 'NVDA', 'JPM', 'KO');"
    )
