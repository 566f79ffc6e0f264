"""Orchestrates the synchronization of review labels across a GitHub organization."""

import asyncio
import time
from typing import Any

import structlog

from github_review_labeler.github.abc import GitHubClientBase
from github_review_labeler.synchronize.labels import ensure_repository_review_labels
from github_review_labeler.synchronize.models import SyncDecision
from github_review_labeler.synchronize.results import BulkSyncResult
from github_review_labeler.synchronize.review_labels import reconcile_issue
from github_review_labeler.utils.constants import DEFAULT_MAX_CONCURRENCY
from github_review_labeler.utils.github import split_issue_repository

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def is_review_request(issue: Any) -> bool:
    """Return True if the issue is backed by a pull request."""
    return bool(getattr(issue, "pull_request", None))


async def run_bulk_sync(
    github_adapter: GitHubClientBase,
    org: str,
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    provision_labels: bool = True,
) -> BulkSyncResult:
    """Provision labels in every repository and reconcile every review request of an organization.

    Repositories and issues are walked page by page at the same time, and
    every repository or review request is handled as its own task as soon as
    its page arrives. At most max_concurrency tasks talk to GitHub at once. A
    failing task is logged and counted without affecting the others, and this
    function only returns once every scheduled task has finished.
    """
    if max_concurrency < 1:
        raise ValueError("max_concurrency must be at least 1")

    result = BulkSyncResult()
    semaphore = asyncio.Semaphore(max_concurrency)
    tasks: list[asyncio.Task[None]] = []

    async def provision_repository(owner: str, repo_name: str) -> None:
        log = logger.bind(repo_owner=owner, repo_name=repo_name)
        async with semaphore:
            log.info("Start syncing labels for repo")
            try:
                await ensure_repository_review_labels(github_adapter, owner, repo_name)
            except Exception as exc:
                result.repositories_failed += 1
                log.error("Error syncing repo review labels", err=str(exc))
                return
            result.repositories_provisioned += 1
            log.info("Done syncing labels for repo")

    async def reconcile_review_request(owner: str, repo_name: str, issue: Any) -> None:
        log = logger.bind(issue_number=issue.number, issue_url=getattr(issue, "html_url", None), repo=f"{owner}/{repo_name}")
        async with semaphore:
            try:
                update = await reconcile_issue(github_adapter, owner, repo_name, issue, log=log)
            except Exception as exc:
                result.review_requests_failed += 1
                log.error("Error reconciling review label", err=str(exc))
                return
            result.review_requests_reconciled += 1
            if update.decision == SyncDecision.UPDATE:
                result.review_requests_updated += 1

    async def walk_repositories() -> None:
        repository_count = 0
        try:
            async for repositories in github_adapter.iter_org_repositories(org):
                for repository in repositories:
                    repository_count += 1
                    tasks.append(asyncio.create_task(provision_repository(repository.owner.login, repository.name)))
        except Exception as exc:
            result.errors.append(f"Error while loading repositories: {exc}")
            logger.error("Error while loading repositories", org=org, err=str(exc))
            return
        logger.info("Finished loading repositories", org=org, repos_len=repository_count)

    async def walk_review_requests() -> None:
        issue_count = 0
        review_request_count = 0
        try:
            async for issues in github_adapter.iter_org_issues(org):
                issue_count += len(issues)
                for issue in issues:
                    if not is_review_request(issue):
                        result.excluded_issues += 1
                        logger.debug("Excluding non-pr issue", issue_number=issue.number, issue_url=getattr(issue, "html_url", None))
                        continue
                    try:
                        owner, repo_name = split_issue_repository(issue)
                    except ValueError as exc:
                        result.review_requests_failed += 1
                        logger.error("Unable to determine repository of issue", issue_number=issue.number, err=str(exc))
                        continue
                    review_request_count += 1
                    logger.debug("Found pr issue", issue_number=issue.number, issue_url=getattr(issue, "html_url", None))
                    tasks.append(asyncio.create_task(reconcile_review_request(owner, repo_name, issue)))
        except Exception as exc:
            result.errors.append(f"Error while loading issues: {exc}")
            logger.error("Error while loading issues", org=org, err=str(exc))
            return
        logger.info("Finished loading pull request issues", org=org, issues_len=issue_count, pr_issues_len=review_request_count)

    start_time = time.time()
    logger.info("Starting bulk sync", org=org, max_concurrency=max_concurrency, provision_labels=provision_labels)

    walkers = [walk_review_requests()]
    if provision_labels:
        walkers.append(walk_repositories())
    await asyncio.gather(*walkers)

    # Every walker has finished, so no further tasks can be scheduled.
    await asyncio.gather(*tasks)

    logger.info(
        "Finished bulk sync",
        org=org,
        duration=round(time.time() - start_time, 2),
        repositories_provisioned=result.repositories_provisioned,
        repositories_failed=result.repositories_failed,
        review_requests_reconciled=result.review_requests_reconciled,
        review_requests_updated=result.review_requests_updated,
        review_requests_failed=result.review_requests_failed,
    )
    return result
