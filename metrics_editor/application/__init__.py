"""Application layer package."""

from .editor_service import EditorSession, LoadResult, coerce_edit_value

__all__ = ["EditorSession", "LoadResult", "coerce_edit_value"]
