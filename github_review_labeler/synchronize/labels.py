"""Contains synchronization logic for GitHub repository labels."""

from typing import Any, Sequence

import structlog

from github_review_labeler.github.abc import GitHubClientBase
from github_review_labeler.schemas.labels import REVIEW_LABEL_SPECS, LabelSpec
from github_review_labeler.synchronize.models import SyncDecision
from github_review_labeler.utils.constants import DEPRECATED_LABELS

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def find_github_label(desired_label: LabelSpec, github_labels: Sequence[Any]) -> Any | None:
    """Return the GitHub label matching a desired label by name.

    An exact name match is preferred over one that only differs in case.
    """
    for github_label in github_labels:
        if github_label.name == desired_label.name:
            return github_label
    for github_label in github_labels:
        if github_label.name.lower() == desired_label.name.lower():
            return github_label
    return None


async def decide_github_label_sync_action(desired_label: LabelSpec, github_label: Any | None = None) -> SyncDecision:
    """Compare a canonical label and a GitHub label, and decide whether to create, update, or no-op.

    Key is label name, compared case-insensitively.
    """
    if github_label is None:
        logger.info("Label not found in GitHub", label_name=desired_label.name)
        return SyncDecision.CREATE

    if github_label.name != desired_label.name:
        logger.info("Label needs to be updated", current_label_name=github_label.name, new_label_name=desired_label.name)
        return SyncDecision.UPDATE

    if github_label.color.lower() != desired_label.color.lower():
        logger.info(
            "Label needs to be updated",
            label_name=desired_label.name,
            current_label_color=github_label.color,
            new_label_color=desired_label.color,
        )
        return SyncDecision.UPDATE

    logger.info("Label is up to date", label_name=desired_label.name)
    return SyncDecision.NOOP


async def ensure_repository_review_labels(
    github_adapter: GitHubClientBase,
    owner: str,
    repo_name: str,
    desired_labels: Sequence[LabelSpec] = REVIEW_LABEL_SPECS,
    deprecated_labels: Sequence[str] = DEPRECATED_LABELS,
) -> list[tuple[str, SyncDecision]]:
    """Make sure a repository defines the review status labels with their canonical colors.

    Deprecated labels are deleted first. The first failing GitHub call stops
    the remaining steps and propagates. Changes already applied are not rolled
    back.
    """
    log = logger.bind(repo_owner=owner, repo_name=repo_name)
    actions: list[tuple[str, SyncDecision]] = []

    try:
        current_labels = await github_adapter.list_labels(owner, repo_name)
    except Exception as exc:
        log.error("Unable to fetch current labels", err=str(exc))
        raise

    for deprecated_label in deprecated_labels:
        for github_label in current_labels:
            if github_label.name.lower() == deprecated_label.lower():
                log.info("Deleting deprecated label", label_name=github_label.name)
                await github_adapter.delete_label(owner, repo_name, github_label.name)
                actions.append((github_label.name, SyncDecision.DELETE))

    remaining_labels = [label for label in current_labels if (label.name, SyncDecision.DELETE) not in actions]

    for desired_label in desired_labels:
        github_label = find_github_label(desired_label, remaining_labels)
        decision = await decide_github_label_sync_action(desired_label, github_label)
        if decision == SyncDecision.CREATE:
            log.info("Creating label", label_name=desired_label.name, label_color=desired_label.color)
            await github_adapter.create_label(owner, repo_name, desired_label.name, desired_label.color)
        elif decision == SyncDecision.UPDATE:
            log.info("Updating label", label_name=desired_label.name, label_color=desired_label.color)
            await github_adapter.update_label(owner, repo_name, github_label.name, desired_label.name, desired_label.color)
        actions.append((desired_label.name, decision))

    return actions
