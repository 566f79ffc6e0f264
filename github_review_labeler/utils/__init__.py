"""Utility modules for shared functionality."""

from .constants import (
    AWAITING_CAKE_LABEL,
    CAKE_MARKER,
    CAKED_LABEL,
    STATUS_LABELS,
    WIP_LABEL,
)
from .github import split_issue_repository, split_repository_in_configuration

__all__ = [
    "WIP_LABEL",
    "CAKED_LABEL",
    "AWAITING_CAKE_LABEL",
    "STATUS_LABELS",
    "CAKE_MARKER",
    "split_issue_repository",
    "split_repository_in_configuration",
]
