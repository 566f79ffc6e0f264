"""Contains results of application execution."""

from dataclasses import dataclass, field

from github_review_labeler.synchronize.models import SyncDecision


@dataclass
class ReviewLabelUpdate:
    """Contains the outcome of reconciling the status label of one review request."""

    decision: SyncDecision
    status: str
    old_labels: list[str]
    new_labels: list[str]


@dataclass
class BulkSyncResult:
    """Contains counts gathered while synchronizing a whole organization."""

    repositories_provisioned: int = 0
    repositories_failed: int = 0
    review_requests_reconciled: int = 0
    review_requests_updated: int = 0
    review_requests_failed: int = 0
    excluded_issues: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        """Return True if any unit of work failed."""
        return bool(self.repositories_failed or self.review_requests_failed or self.errors)
