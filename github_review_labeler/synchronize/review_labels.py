"""Contains synchronization logic for the review status label of a single review request."""

from typing import Any, Sequence

import structlog

from github_review_labeler.github.abc import GitHubClientBase
from github_review_labeler.schemas.review import ReviewRequest
from github_review_labeler.synchronize.models import SyncDecision
from github_review_labeler.synchronize.results import ReviewLabelUpdate
from github_review_labeler.synchronize.status import classify_review_status
from github_review_labeler.synchronize.utils import text_or_empty
from github_review_labeler.utils.constants import STATUS_LABELS

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


async def load_review_request(github_adapter: GitHubClientBase, owner: str, repo_name: str, issue: Any) -> ReviewRequest:
    """Load every comment of an issue and build its review request.

    A failure while paging through the comments propagates, so a review
    request is never classified on a partial comment history.
    """
    comments = await github_adapter.list_issue_comments(owner, repo_name, issue.number)
    return ReviewRequest.from_issue(owner, repo_name, issue, [text_or_empty(getattr(comment, "body", None)) for comment in comments])


def compute_review_labels(current_labels: Sequence[str], status: str) -> list[str]:
    """Return the complete label set an issue should carry for the given status.

    The status label comes first, followed by every non-status label in its
    current order.
    """
    return [status] + [label for label in current_labels if label not in STATUS_LABELS]


async def decide_review_label_sync_action(current_labels: Sequence[str], status: str) -> SyncDecision:
    """Compare the current labels of an issue with the desired status, and decide whether to update or no-op."""
    present_status_labels = [label for label in current_labels if label in STATUS_LABELS]
    if not present_status_labels:
        return SyncDecision.UPDATE
    if any(label != status for label in present_status_labels):
        return SyncDecision.UPDATE
    return SyncDecision.NOOP


async def update_review_labels(
    github_adapter: GitHubClientBase,
    review: ReviewRequest,
    log: structlog.stdlib.BoundLogger | None = None,
) -> ReviewLabelUpdate:
    """Bring the status label of a review request in line with its title and comments.

    When an update is needed, the full label set is written with a single
    replace-all call, so repeating it is harmless. Errors from that call are
    logged and re-raised; nothing is retried.
    """
    if log is None:
        log = logger.bind(issue_number=review.number, issue_url=review.url, repo=review.repository_path)

    status = classify_review_status(review.title, review.comments)
    old_labels = list(review.labels)
    new_labels = compute_review_labels(old_labels, status)
    decision = await decide_review_label_sync_action(old_labels, status)

    trello_card_urls = review.trello_card_urls()
    if trello_card_urls:
        log.debug("Found Trello cards linked to review request", trello_card_urls=trello_card_urls)

    if decision == SyncDecision.NOOP:
        log.info("Review label does not need updating", labels=old_labels, status=status)
        return ReviewLabelUpdate(decision=decision, status=status, old_labels=old_labels, new_labels=old_labels)

    if not any(label in STATUS_LABELS for label in old_labels):
        log.info("Could not find review label", old_labels=old_labels, new_labels=new_labels)
    else:
        log.info("Review label is incorrect", old_labels=old_labels, new_labels=new_labels)

    try:
        await github_adapter.set_labels_on_issue(review.owner, review.repo_name, review.number, new_labels)
    except Exception as exc:
        log.error("Unable to update issue review label", err=str(exc))
        raise

    return ReviewLabelUpdate(decision=decision, status=status, old_labels=old_labels, new_labels=new_labels)


async def reconcile_issue(
    github_adapter: GitHubClientBase,
    owner: str,
    repo_name: str,
    issue: Any,
    log: structlog.stdlib.BoundLogger | None = None,
) -> ReviewLabelUpdate:
    """Load the comments of an issue and reconcile its review status label."""
    review = await load_review_request(github_adapter, owner, repo_name, issue)
    return await update_review_labels(github_adapter, review, log=log)
