"""Boundary Protocols - contracts between core and shell.

Invariants:
    - Core NEVER imports from shell - dependency arrows point inward only
    - External collaborators are reached through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
"""

from typing import Protocol


class ImageHost(Protocol):
    """Contract for the external image-hosting collaborator."""
    async def upload(self, data: bytes, filename: str) -> str: ...
