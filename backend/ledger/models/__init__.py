"""ORM Models — SQLAlchemy declarative models for the database store backend.

Invariants:
    - All models inherit from Base (db/base.py)
    - Only used when store_backend == "database"

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all/autogenerate
"""

from ledger.models.article import Article  # noqa: F401
