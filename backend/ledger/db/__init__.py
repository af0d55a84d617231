"""Database Infrastructure — SQLAlchemy declarative Base for the database store backend.

Invariants:
    - All sessions are async (AsyncSession), created by infrastructure/database.py

Design Decisions:
    - asyncpg driver for PostgreSQL, aiosqlite for local SQLite files and tests
"""
