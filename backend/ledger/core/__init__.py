"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic (the current instant is always a parameter)

Design Decisions:
    - Functional core separated from imperative shell: classification, exclusion,
      conversion and stats are plain functions, the pipeline service does the IO around them
"""
