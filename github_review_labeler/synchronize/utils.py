"""Contains utility functions for synchronization actions."""

from typing import Sequence

from github_review_labeler.synchronize.types import HasName, LabelType


def extract_label_names(labels: Sequence[LabelType] | None) -> list[str]:
    """Extract label names from a list of GitHub label objects, strings, or dicts.

    Server order is preserved and duplicate names are dropped.
    """
    names: list[str] = []
    for label in labels or []:
        if isinstance(label, str):
            name = label
        elif isinstance(label, dict) and isinstance(label.get("name"), str):
            name = label["name"]
        elif isinstance(label, HasName) and isinstance(label.name, str):
            name = label.name
        else:
            continue
        if name not in names:
            names.append(name)
    return names


def text_or_empty(value: object) -> str:
    """Return value if it is a string, otherwise an empty string.

    githubkit marks absent fields with an UNSET sentinel rather than None.
    """
    return value if isinstance(value, str) else ""
