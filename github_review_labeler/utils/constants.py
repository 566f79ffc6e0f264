"""Shared constants used across the application."""

# This file is intended to hold shared constants.

import re

# Review Status Labels
# --------------------

WIP_LABEL = "wip"
"""Status label for review requests that are still a work in progress."""

CAKED_LABEL = "caked"
"""Status label for review requests that a reviewer approved with a cake."""

AWAITING_CAKE_LABEL = "awaiting-cake"
"""Status label for review requests waiting on a reviewer."""

STATUS_LABELS = frozenset({WIP_LABEL, CAKED_LABEL, AWAITING_CAKE_LABEL})
"""The mutually exclusive status labels. An issue carries at most one after reconciliation."""

STATUS_LABEL_COLORS = {
    # Blue
    WIP_LABEL: "207de5",
    # Green
    CAKED_LABEL: "009800",
    # Orange
    AWAITING_CAKE_LABEL: "eb6420",
}
"""Canonical color of each status label."""

DEPRECATED_LABELS = ["Awaiting Cake"]
"""Label names removed from every repository, matched case-insensitively."""

# Status Detection
# ----------------

WIP_PATTERN = re.compile(r"(?i)wip")
"""Pattern matched against the issue title. Any substring matches, so "Swipe" counts as WIP."""

CAKE_MARKER = ":cake:"
"""Literal, case-sensitive marker a reviewer leaves in a comment to approve."""

# Regex Patterns
# --------------

ISSUE_URL_PATTERN = re.compile(r"repos/([^/]+)/([^/]+)/issues")
"""Pattern to extract the owner and repository name from an issue API URL."""

TRELLO_URL_PATTERN = re.compile(r"(https?://trello.com/(?:[^\s()]+))")
"""Pattern to match Trello card links in issue bodies and comments."""

# GitHub API Settings
# -------------------

DEFAULT_GITHUB_API_URL = "https://api.github.com"
"""Default GitHub API base URL."""

DEFAULT_GITHUB_ORG = "geckoboard"
"""Organization managed when none is configured."""

DEFAULT_PER_PAGE = 100
"""Page size requested from every paginated GitHub endpoint."""

DEFAULT_MAX_CONCURRENCY = 10
"""Default number of repositories or review requests processed at the same time."""

# Webhook Settings
# ----------------

HANDLED_WEBHOOK_EVENTS = frozenset({"pull_request", "issue_comment"})
"""Values of the X-GitHub-Event header that can trigger a reconciliation."""
