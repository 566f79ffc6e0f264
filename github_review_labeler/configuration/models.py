"""Models for configuration between CLI arguments and environment variables."""

from dataclasses import dataclass


@dataclass
class LabelerConfig:
    """Configuration class for the GitHub Review Labeler CLI."""

    debug: bool
    port: int
    github_org: str
    github_api_url: str
    github_access_token: str
    max_concurrency: int
    provision_labels: bool
