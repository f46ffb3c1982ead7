"""Infrastructure Layer - database engine, image host client, and logging setup.

Invariants:
    - Infrastructure never holds validation rules (those live in core/)
    - External failures are mapped to EventDeskError subclasses (core/errors.py)
"""
