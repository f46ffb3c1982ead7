"""Core Layer - pure record normalization and validation, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell: stores call the pipeline
      explicitly on every write path instead of relying on ORM hooks
"""
