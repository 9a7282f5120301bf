# backend/networth/__init__.py
"""
Net worth tracker: account valuations, performance metrics and chart series.

Package layout:
    networth/
    ├── config.py                # Pydantic Settings (environment driven)
    ├── database.py              # SQLAlchemy engine and session factory
    ├── models.py                # Account / AccountUpdate ORM models
    ├── utils/                   # Logging setup, calendar and clock helpers
    └── services/
        ├── store.py             # Read-only update store accessor
        └── performance/         # Valuation engine and series generator
"""

__version__ = "0.1.0"
