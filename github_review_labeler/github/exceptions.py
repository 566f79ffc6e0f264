"""Contains exceptions raised when talking to the GitHub API."""


class GitHubRequestError(Exception):
    """Raised when a GitHub API request fails."""

    def __init__(self, function: str, status_code: int, message: str, url: str | None = None) -> None:
        """Initializes the exception with the failed call and the response details."""
        super().__init__(f"GitHub {status_code} error in {function}: {message} | url: {url}")
        self.function = function
        self.status_code = status_code
        self.message = message
        self.url = url
