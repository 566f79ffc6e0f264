"""Contains utility functions for GitHub interactions."""

from typing import Any

from github_review_labeler.utils.constants import ISSUE_URL_PATTERN


async def split_repository_in_configuration(repo: str | None) -> tuple[str, str]:
    """Splits the repository in the configuration into owner and repository."""
    if repo is None:
        raise ValueError("A repository is required in the format 'owner/repo'.")
    repo = repo.strip("/")
    parts = repo.split("/")
    if len(parts) != 2 or not all(parts):
        raise ValueError("Repository must be in the format 'owner/repo' with no leading/trailing slashes or extra parts.")
    owner, repository = parts
    return owner, repository


def split_issue_repository(issue: Any) -> tuple[str, str]:
    """Return the owner and repository name an issue belongs to.

    Organization-wide issue listings embed the repository object. When it is
    absent, the owner and name are parsed from the issue API URL instead.
    """
    repository = getattr(issue, "repository", None)
    if repository:
        owner = getattr(repository, "owner", None)
        login = getattr(owner, "login", None)
        name = getattr(repository, "name", None)
        if isinstance(login, str) and isinstance(name, str):
            return login, name

    url = getattr(issue, "url", None)
    if isinstance(url, str):
        match = ISSUE_URL_PATTERN.search(url)
        if match:
            return match.group(1), match.group(2)

    raise ValueError(f"Unable to determine the repository of issue #{getattr(issue, 'number', '?')}")
