"""
Main CLI dispatcher for mdcms.

Usage:
    mdcms types                          # Dashboard of derived content types
    mdcms content list TYPE [--tag T]
    mdcms content [show|new|edit|delete] TYPE SLUG
"""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console

from mdcms import __version__
from mdcms.core.logging import configure_logging

console = Console()


class Context:
    """Shared context for all commands."""

    def __init__(
        self,
        config_path: Path | None = None,
        verbose: bool = False,
        dry_run: bool = False,
    ):
        self.config_path = config_path
        self.verbose = verbose
        self.dry_run = dry_run
        self.console = console
        self._settings = None

    @property
    def settings(self):
        """Settings snapshot, loaded once per invocation."""
        if self._settings is None:
            from mdcms.core.config import load_settings
            from mdcms.core.errors import ConfigError

            try:
                self._settings = load_settings(self.config_path)
            except (FileNotFoundError, ConfigError) as e:
                raise click.ClickException(str(e)) from e
        return self._settings

    def store(self):
        from mdcms.content.store import ContentStore

        return ContentStore(self.settings.content_dir)

    def deriver(self):
        from mdcms.taxonomy.analyzer import ContentTypeDeriver

        return ContentTypeDeriver(self.settings, self.store())


pass_context = click.make_pass_decorator(Context, ensure=True)


@click.group()
@click.version_option(version=__version__, prog_name="mdcms")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: auto-detect)",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option("-n", "--dry-run", is_flag=True, help="Preview without making changes")
@click.pass_context
def main(
    ctx: click.Context, config_path: Path | None, verbose: bool, dry_run: bool
) -> None:
    """File-based content management.

    Content types are derived from the tags used across the content directory.
    """
    configure_logging(verbose=verbose)
    ctx.obj = Context(config_path=config_path, verbose=verbose, dry_run=dry_run)

    if dry_run:
        console.print("[yellow]DRY RUN MODE - No changes will be made[/yellow]")


# Import and register command groups (imports after main definition intentional)
from mdcms.content.commands import content  # noqa: E402
from mdcms.taxonomy.commands import types  # noqa: E402

main.add_command(content)
main.add_command(types)


if __name__ == "__main__":
    main()
