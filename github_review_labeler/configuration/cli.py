"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio
import logging
import sys

import structlog
import typer
from aiohttp import web
from dotenv import load_dotenv
from typer import Argument, Option
from typing_extensions import Annotated

from github_review_labeler.configuration.exceptions import InvalidConfigurationElementError, RequiredConfigurationElementError
from github_review_labeler.configuration.models import LabelerConfig
from github_review_labeler.configuration.reconcile import reconcile_labeler_configuration
from github_review_labeler.github.adapter import GitHubKitAdapter
from github_review_labeler.github.exceptions import GitHubRequestError
from github_review_labeler.synchronize.driver import run_bulk_sync
from github_review_labeler.synchronize.labels import ensure_repository_review_labels
from github_review_labeler.synchronize.models import SyncDecision
from github_review_labeler.synchronize.results import BulkSyncResult
from github_review_labeler.synchronize.review_labels import reconcile_issue
from github_review_labeler.utils.github import split_repository_in_configuration
from github_review_labeler.webhook.server import create_webhook_app

load_dotenv()

typer_app = typer.Typer(pretty_exceptions_show_locals=False)


def configure_logging(debug: bool) -> None:
    """Configure structlog to write logfmt lines to stdout."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.LogfmtRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG if debug else logging.INFO),
        logger_factory=structlog.PrintLoggerFactory(sys.stdout),
        cache_logger_on_first_use=True,
    )


def main_callback(
    ctx: typer.Context,
    debug: Annotated[bool | None, Option("--debug/--no-debug", help="Enable debug logging.")] = None,
    github_api_url: Annotated[str | None, Option(help="GitHub API URL.")] = None,
    github_access_token: Annotated[str | None, Option(help="GitHub access token. Prefer the GITHUB_ACCESS_TOKEN environment variable.")] = None,
) -> None:
    """Keep review status labels of pull requests in sync across a GitHub organization."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    ctx.obj["github_api_url"] = github_api_url
    ctx.obj["github_access_token"] = github_access_token


typer_app.callback()(main_callback)


def load_configuration(ctx: typer.Context, **cli_values: object) -> LabelerConfig:
    """Reconcile the configuration for a command, exiting on missing or invalid settings."""
    try:
        config = asyncio.run(
            reconcile_labeler_configuration(
                cli_debug=ctx.obj["debug"],
                cli_github_api_url=ctx.obj["github_api_url"],
                cli_github_access_token=ctx.obj["github_access_token"],
                **cli_values,  # type: ignore[arg-type]
            )
        )
    except (RequiredConfigurationElementError, InvalidConfigurationElementError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc
    configure_logging(config.debug)
    return config


def echo_bulk_sync_summary(result: BulkSyncResult) -> None:
    """Print the counts of a bulk sync run."""
    typer.echo("=" * 70)
    typer.echo("BULK SYNC SUMMARY")
    typer.echo("=" * 70)
    typer.echo(f"Repositories provisioned: {result.repositories_provisioned}")
    typer.echo(f"Repositories failed: {result.repositories_failed}")
    typer.echo(f"Review requests reconciled: {result.review_requests_reconciled}")
    typer.echo(f"Review requests updated: {result.review_requests_updated}")
    typer.echo(f"Review requests failed: {result.review_requests_failed}")
    typer.echo(f"Issues excluded (not pull requests): {result.excluded_issues}")
    for error in result.errors:
        typer.echo(f"Error: {error}", err=True)
    typer.echo("=" * 70)


@typer_app.command(name="run")
def run_cli(
    ctx: typer.Context,
    port: Annotated[int | None, Option(help="Port to run the webhook server on. 0 disables the server.")] = None,
    github_org: Annotated[str | None, Option(help="The GitHub organization to manage review labels for.")] = None,
    max_concurrency: Annotated[int | None, Option(help="Maximum number of repositories or review requests processed at once.")] = None,
    provision_labels: Annotated[
        bool | None, Option("--provision-labels/--no-provision-labels", help="Ensure every repository defines the review labels.")
    ] = None,
) -> None:
    """Synchronize every review request of the organization, then serve webhooks if a port is set."""
    config = load_configuration(
        ctx,
        cli_port=port,
        cli_github_org=github_org,
        cli_max_concurrency=max_concurrency,
        cli_provision_labels=provision_labels,
    )

    async def bulk_sync() -> tuple[GitHubKitAdapter, BulkSyncResult]:
        adapter = await GitHubKitAdapter.create(github_access_token=config.github_access_token, github_api_url=config.github_api_url)
        result = await run_bulk_sync(
            adapter,
            config.github_org,
            max_concurrency=config.max_concurrency,
            provision_labels=config.provision_labels,
        )
        return adapter, result

    adapter, result = asyncio.run(bulk_sync())
    echo_bulk_sync_summary(result)

    if config.port > 0:
        typer.echo(f"Serving webhooks on port {config.port}")
        web.run_app(create_webhook_app(adapter), port=config.port, print=None)


@typer_app.command(name="reconcile-issue")
def reconcile_issue_cli(
    ctx: typer.Context,
    repo: Annotated[str, Argument(help="Repository name (owner/repo).")],
    issue_number: Annotated[int, Argument(help="Number of the pull request issue to reconcile.")],
) -> None:
    """Reconcile the review status label of a single pull request."""
    config = load_configuration(ctx)

    async def reconcile() -> None:
        owner, repo_name = await split_repository_in_configuration(repo=repo)
        adapter = await GitHubKitAdapter.create(github_access_token=config.github_access_token, github_api_url=config.github_api_url)
        issue = await adapter.get_issue(owner, repo_name, issue_number)
        if not issue.pull_request:
            typer.echo(f"Issue #{issue_number} in {repo} is not a pull request", err=True)
            raise typer.Exit(1)
        update = await reconcile_issue(adapter, owner, repo_name, issue)
        if update.decision == SyncDecision.UPDATE:
            typer.echo(f"Updated labels of #{issue_number} from {update.old_labels} to {update.new_labels}")
        else:
            typer.echo(f"Labels of #{issue_number} are up to date ({update.status})")

    try:
        asyncio.run(reconcile())
    except (ValueError, GitHubRequestError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc


@typer_app.command(name="provision-labels")
def provision_labels_cli(
    ctx: typer.Context,
    repo: Annotated[str, Argument(help="Repository name (owner/repo).")],
) -> None:
    """Ensure a single repository defines the review status labels."""
    config = load_configuration(ctx)

    async def provision() -> list[tuple[str, SyncDecision]]:
        owner, repo_name = await split_repository_in_configuration(repo=repo)
        adapter = await GitHubKitAdapter.create(github_access_token=config.github_access_token, github_api_url=config.github_api_url)
        return await ensure_repository_review_labels(adapter, owner, repo_name)

    try:
        actions = asyncio.run(provision())
    except (ValueError, GitHubRequestError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc
    for label_name, decision in actions:
        typer.echo(f"  - {label_name}: {decision.value}")


if __name__ == "__main__":
    typer_app()
