#!/usr/bin/env python3
# backend/init_db.py
"""
Database initialization script.

Creates the accounts / account_updates tables in the configured store.
This script can be run from any directory:
    python backend/init_db.py
    cd backend && python init_db.py
"""
import logging
import sys
from pathlib import Path

# Add the backend directory to Python path so 'networth' package is importable
backend_dir = Path(__file__).parent
sys.path.insert(0, str(backend_dir))

from networth.database import engine
from networth.models import Base
from networth.utils import setup_logging

logger = logging.getLogger("init_db")


def init_db() -> None:
    """Create all database tables defined in models."""
    logger.info(f"Creating database tables on {engine.url!r}")
    Base.metadata.create_all(bind=engine)
    logger.info("Tables created successfully")


if __name__ == "__main__":
    setup_logging()
    init_db()
