"""
Repository contract shared by products, batches and upload records.
"""

from typing import Any, Optional, Protocol, TypeVar

RecordT = TypeVar("RecordT")


class BaseRepository(Protocol[RecordT]):
    """Persistence calls every inventory repository supports.

    Writes commit immediately; ``rollback`` is for callers that catch a
    failed write and want to keep using the same session.
    """

    def get_by_id(self, id: int) -> Optional[RecordT]:
        ...

    def create(self, obj_in: Any) -> RecordT:
        """Persist a model instance, a pydantic schema or a plain dict."""
        ...

    def delete(self, id: int) -> Optional[RecordT]:
        """Remove a record. Returns it, or None when the id is unknown."""
        ...

    def rollback(self) -> None:
        ...
