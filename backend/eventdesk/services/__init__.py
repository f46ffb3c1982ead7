"""Services Layer - async stores that run the core pipelines around each DB write.

Invariants:
    - Every write path calls the matching core enforce_* function first
    - Stores raise EventDeskError subclasses, never raw SQLAlchemy errors for
      conditions the caller can act on (duplicate slug, missing event)
"""
