"""CLI command for the content type dashboard."""

from __future__ import annotations

import json as json_module

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mdcms.core.errors import CmsError

console = Console()


@click.command(name="types")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def types(ctx, as_json: bool) -> None:
    """Show every content type derived from tags, with item counts."""
    try:
        dashboard = ctx.deriver().dashboard()
    except CmsError as e:
        raise click.ClickException(str(e)) from e

    if as_json:
        click.echo(
            json_module.dumps(
                [{**ct.to_dict(), "count": count} for ct, count in dashboard],
                indent=2,
                ensure_ascii=False,
            )
        )
        return

    if not dashboard:
        console.print("[yellow]No content types found.[/yellow]")
        console.print(
            f"[dim]No tagged content in {escape(str(ctx.settings.content_dir))}[/dim]"
        )
        return

    table = Table(title=f"Content Types ({len(dashboard)})")
    table.add_column("", no_wrap=True)
    table.add_column("Name", style="bold")
    table.add_column("Slug", style="cyan")
    table.add_column("Items", justify="right")

    for ct, count in dashboard:
        table.add_row(escape(ct.icon), escape(ct.name), escape(ct.slug), str(count))

    console.print(table)
