"""Contains models shared by the synchronization logic."""

from enum import Enum


class SyncDecision(str, Enum):
    """Decision taken when comparing desired state with GitHub."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    NOOP = "noop"
