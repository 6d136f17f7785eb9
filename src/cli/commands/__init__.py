"""CLI command modules."""

from .entries import add, delete, list_entries
from .insights import dashboard, insights

__all__ = ["add", "list_entries", "delete", "dashboard", "insights"]
