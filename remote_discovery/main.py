"""CLI entry point for remote-discovery."""

import json
import sys

import click

from remote_discovery.config.remote_config import GitRemoteConfig
from remote_discovery.config.settings import GitRemoteSettings
from remote_discovery.exceptions import ConfigurationError
from remote_discovery.git.locator import find_repository_root
from remote_discovery.utils.logging_config import configure_logging, get_logger

log = get_logger(__name__)


@click.group()
@click.option(
    "--config",
    "config_path",
    default=None,
    help="YAML file with git.repository.url / git.repository.ref overrides",
    type=click.Path(),
)
@click.option(
    "--directory",
    "-C",
    default=None,
    help="Directory to discover the repository from (default: current directory)",
    type=click.Path(file_okay=False),
)
@click.option(
    "--log-level",
    default="WARNING",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    help="Logging level",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, directory: str | None, log_level: str) -> None:
    """remote-discovery: find the remote URL and branch of a git checkout."""
    configure_logging(log_level)

    try:
        settings = GitRemoteSettings.from_yaml(config_path) if config_path else GitRemoteSettings()
    except ConfigurationError as e:
        click.echo(f"Error: {e.message}", err=True)
        log.debug("config_error", exc_info=True)
        sys.exit(1)

    ctx.obj = {"config": GitRemoteConfig(settings, start=directory), "directory": directory}


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.pass_context
def show(ctx: click.Context, as_json: bool) -> None:
    """Print the repository URL and branch."""
    config: GitRemoteConfig = ctx.obj["config"]

    try:
        url = config.get_url()
        branch = config.get_branch()
    except ConfigurationError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps({"url": url, "branch": branch}))
    else:
        click.echo(f"url:    {url}")
        click.echo(f"branch: {branch}")


@cli.command()
@click.pass_context
def refs(ctx: click.Context) -> None:
    """List remote-tracking refs at HEAD, most preferred first."""
    config: GitRemoteConfig = ctx.obj["config"]
    git_dir = find_repository_root(ctx.obj["directory"])
    if git_dir is None:
        click.echo("Error: Not inside a git repository", err=True)
        sys.exit(1)

    matches = config.resolver.head_references(git_dir)
    if not matches:
        click.echo("No remote-tracking references point at HEAD")
        return

    for index, ref in enumerate(matches):
        marker = "*" if index == 0 else " "
        click.echo(f"{marker} {ref.name} ({ref.remote_name or 'no remote'}) {ref.commit[:12]}")


if __name__ == "__main__":
    cli()
