"""Resource access for the manifest server."""

from .store import ResourceStore, mime_type_for

__all__ = ["ResourceStore", "mime_type_for"]
