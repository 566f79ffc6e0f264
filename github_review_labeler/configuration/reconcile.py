"""Reconcile configuration between CLI arguments and environment variables."""

from github_review_labeler.configuration.env import Settings
from github_review_labeler.configuration.exceptions import InvalidConfigurationElementError, RequiredConfigurationElementError
from github_review_labeler.configuration.models import LabelerConfig


async def reconcile_labeler_configuration(
    cli_debug: bool | None = None,
    cli_port: int | None = None,
    cli_github_org: str | None = None,
    cli_github_api_url: str | None = None,
    cli_github_access_token: str | None = None,
    cli_max_concurrency: int | None = None,
    cli_provision_labels: bool | None = None,
    settings: Settings | None = None,
) -> LabelerConfig:
    """Reconciles CLI arguments with environment settings.

    A value given on the command line wins over the environment (or .env
    file), which wins over the built-in default.

    Raises:
        RequiredConfigurationElementError: If no GitHub access token is configured.
        InvalidConfigurationElementError: If the port or concurrency is out of range.

    Returns:
        LabelerConfig: The resolved configuration.
    """
    if settings is None:
        settings = Settings()

    github_access_token = cli_github_access_token or settings.GITHUB_ACCESS_TOKEN
    if not github_access_token:
        raise RequiredConfigurationElementError(
            name="GitHub access token",
            cli_name="github_access_token",
            env_name="GITHUB_ACCESS_TOKEN",
        )

    port = cli_port if cli_port is not None else settings.PORT
    if port < 0 or port > 65535:
        raise InvalidConfigurationElementError(f"Port must be between 0 and 65535, got {port}")

    max_concurrency = cli_max_concurrency if cli_max_concurrency is not None else settings.MAX_CONCURRENCY
    if max_concurrency < 1:
        raise InvalidConfigurationElementError(f"Max concurrency must be at least 1, got {max_concurrency}")

    return LabelerConfig(
        debug=cli_debug if cli_debug is not None else settings.DEBUG,
        port=port,
        github_org=cli_github_org or settings.GITHUB_ORG,
        github_api_url=cli_github_api_url or settings.GITHUB_API_URL,
        github_access_token=github_access_token,
        max_concurrency=max_concurrency,
        provision_labels=cli_provision_labels if cli_provision_labels is not None else settings.PROVISION_LABELS,
    )
