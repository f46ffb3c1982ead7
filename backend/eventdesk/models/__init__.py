"""ORM Models - SQLAlchemy declarative models for events and bookings.

Invariants:
    - All models inherit from Base (db/base.py)
    - Rows only ever receive values produced by the core enforce_* pipelines

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all
"""

from eventdesk.models.event import Event  # noqa: F401
from eventdesk.models.booking import Booking  # noqa: F401
