"""Database Infrastructure - SQLAlchemy declarative Base.

Invariants:
    - Single async engine per process (created lazily by infrastructure/database.py)
"""
