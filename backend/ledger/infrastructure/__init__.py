"""Infrastructure Layer — record stores, the name cipher, rate loading and logging.

Invariants:
    - Infrastructure implements the protocols in core/repository_protocols.py
    - Every IO failure is mapped to a LedgerError subclass (core/errors.py) before it leaves

Design Decisions:
    - One adapter per backing resource: JSON file, SQL table, rate file
"""
