"""Pydantic schema for a review request being tracked for review status."""

from typing import Any, Sequence

from pydantic import BaseModel, ConfigDict

from github_review_labeler.synchronize.utils import extract_label_names, text_or_empty
from github_review_labeler.utils.constants import TRELLO_URL_PATTERN


class ReviewRequest(BaseModel):
    """A pull-request-backed issue together with its full comment history.

    Instances are only built once every page of comments has been loaded and
    are never modified afterwards.
    """

    model_config = ConfigDict(frozen=True)

    owner: str
    repo_name: str
    number: int
    url: str
    title: str
    body: str = ""
    labels: tuple[str, ...] = ()
    comments: tuple[str, ...] = ()

    @classmethod
    def from_issue(cls, owner: str, repo_name: str, issue: Any, comments: Sequence[str]) -> "ReviewRequest":
        """Build a review request from a githubkit issue or webhook issue payload."""
        return cls(
            owner=owner,
            repo_name=repo_name,
            number=issue.number,
            url=text_or_empty(getattr(issue, "html_url", None)),
            title=text_or_empty(getattr(issue, "title", None)),
            body=text_or_empty(getattr(issue, "body", None)),
            labels=tuple(extract_label_names(getattr(issue, "labels", None))),
            comments=tuple(comments),
        )

    @property
    def repository_path(self) -> str:
        """Return the repository in 'owner/repo' format."""
        return f"{self.owner}/{self.repo_name}"

    def trello_card_urls(self) -> list[str]:
        """Return every Trello card link in the body and comments, body first."""
        urls = TRELLO_URL_PATTERN.findall(self.body)
        for comment in self.comments:
            urls.extend(TRELLO_URL_PATTERN.findall(comment))
        return urls
