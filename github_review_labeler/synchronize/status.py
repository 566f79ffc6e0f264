"""Derives the review status of a review request from its title and comments."""

from typing import Iterable

from github_review_labeler.utils.constants import (
    AWAITING_CAKE_LABEL,
    CAKE_MARKER,
    CAKED_LABEL,
    WIP_LABEL,
    WIP_PATTERN,
)


def is_wip(title: str) -> bool:
    """Return True if the title contains "wip" in any case, anywhere.

    This is a substring heuristic: a title such as "Swipe feature" counts as
    a work in progress.
    """
    return WIP_PATTERN.search(title) is not None


def is_caked(comments: Iterable[str]) -> bool:
    """Return True if any comment body contains the cake marker."""
    return any(CAKE_MARKER in comment for comment in comments)


def classify_review_status(title: str, comments: Iterable[str]) -> str:
    """Return the status label a review request should carry.

    The first matching rule wins: a WIP title, then a cake in any comment,
    otherwise the review is still awaiting cake. The issue body is never
    inspected.
    """
    if is_wip(title):
        return WIP_LABEL
    if is_caked(comments):
        return CAKED_LABEL
    return AWAITING_CAKE_LABEL
