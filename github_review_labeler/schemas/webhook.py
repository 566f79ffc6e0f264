"""Pydantic schema for the subset of GitHub webhook payloads that is inspected."""

from typing import Any

from pydantic import BaseModel


class WebhookLabel(BaseModel):
    """Label attached to an issue in a webhook payload."""

    name: str


class WebhookIssue(BaseModel):
    """Issue object of an issue_comment or pull_request payload."""

    number: int = 0
    html_url: str = ""
    title: str = ""
    body: str | None = None
    labels: list[WebhookLabel] = []
    pull_request: dict[str, Any] | None = None


class WebhookOwner(BaseModel):
    """Owner of the repository a webhook refers to."""

    login: str


class WebhookRepository(BaseModel):
    """Repository object of a webhook payload."""

    name: str
    owner: WebhookOwner


class WebhookPullRequest(BaseModel):
    """Pull request object of a pull_request payload."""

    number: int


class WebhookPayload(BaseModel):
    """Webhook body. Every field is optional and unknown fields are ignored."""

    action: str = ""
    issue: WebhookIssue | None = None
    repository: WebhookRepository | None = None
    pull_request: WebhookPullRequest | None = None
