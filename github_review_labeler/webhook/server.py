"""HTTP endpoints receiving GitHub webhooks and reporting liveness."""

import json

import structlog
from aiohttp import web
from pydantic import ValidationError

from github_review_labeler.github.abc import GitHubClientBase
from github_review_labeler.schemas.webhook import WebhookPayload
from github_review_labeler.synchronize.review_labels import reconcile_issue
from github_review_labeler.utils.constants import HANDLED_WEBHOOK_EVENTS

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

GITHUB_ADAPTER_KEY = web.AppKey("github_adapter", GitHubClientBase)

# aiohttp has no named constant for 501 responses.
NOT_IMPLEMENTED = 501


async def ping(request: web.Request) -> web.Response:
    """Report that the server is alive."""
    return web.Response(text="ok")


async def github_webhook(request: web.Request) -> web.Response:
    """Reconcile the review label of the issue a pull_request or issue_comment event refers to."""
    github_adapter = request.app[GITHUB_ADAPTER_KEY]
    log = logger.bind(endpoint="webhook")

    event = request.headers.get("X-GitHub-Event", "")
    if event not in HANDLED_WEBHOOK_EVENTS:
        log.info("Not handling webhook", github_event=event)
        return web.Response(status=200)

    try:
        payload = WebhookPayload.model_validate(json.loads(await request.text()))
    except (ValueError, ValidationError) as exc:
        log.error("Could not unmarshal json", err=str(exc))
        return web.Response(status=NOT_IMPLEMENTED)

    log = log.bind(action=payload.action)
    if payload.repository is not None:
        log = log.bind(repo_name=payload.repository.name, repo_owner=payload.repository.owner.login)
    if payload.issue is not None:
        log = log.bind(issue_number=payload.issue.number, issue_url=payload.issue.html_url)

    issue = None
    if payload.issue is not None and payload.issue.number != 0 and payload.issue.pull_request is not None:
        log.info("Found issue with pr links")
        issue = payload.issue
    elif payload.pull_request is not None and payload.action == "opened":
        log.info("Found pr opened event, inferring issue")
        if payload.repository is None:
            log.error("Pull request event does not name a repository")
            return web.Response(status=NOT_IMPLEMENTED)
        try:
            issue = await github_adapter.get_issue(payload.repository.owner.login, payload.repository.name, payload.pull_request.number)
        except Exception as exc:
            log.error("Encountered error while loading issue", err=str(exc))
            return web.Response(status=NOT_IMPLEMENTED)
    else:
        log.info("Payload does not refer to pull request", github_event=event)
        return web.Response(status=200)

    if payload.repository is None:
        log.error("Issue event does not name a repository")
        return web.Response(status=NOT_IMPLEMENTED)

    try:
        await reconcile_issue(github_adapter, payload.repository.owner.login, payload.repository.name, issue, log=log)
    except Exception as exc:
        log.error("Unable to reconcile review label", err=str(exc))
        return web.Response(status=NOT_IMPLEMENTED)

    return web.Response(status=200)


def create_webhook_app(github_adapter: GitHubClientBase) -> web.Application:
    """Build the web application serving the webhook and health endpoints."""
    app = web.Application()
    app[GITHUB_ADAPTER_KEY] = github_adapter
    app.router.add_get("/ping", ping)
    app.router.add_post("/github", github_webhook)
    return app
