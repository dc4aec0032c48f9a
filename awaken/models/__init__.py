"""Application models package."""

from awaken.models.storage_entry import StorageEntry

__all__ = ["StorageEntry"]
