# backend/networth/services/__init__.py
"""
Service layer for the Net Worth Tracker.

- performance: Valuation engine, series generator and PerformanceService
- store: Read-only accessor over the SQLAlchemy update store
- exceptions: Domain exceptions (no presentation knowledge)
"""
