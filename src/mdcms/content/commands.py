"""CLI commands for reading and writing content items."""

from __future__ import annotations

import json as json_module
from datetime import datetime

import click
from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.prompt import Confirm
from rich.table import Table

from mdcms.content.codec import DATE_FORMAT
from mdcms.content.document import ContentItem, OGImage
from mdcms.core.errors import CmsError

console = Console()


def _content_type(ctx, type_slug: str, must_exist: bool = True):
    """Resolve a content type, turning lookup errors into CLI errors."""
    deriver = ctx.deriver()
    try:
        if must_exist:
            return deriver.get_content_type(type_slug)
        return deriver.content_type(type_slug)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="TYPE") from e
    except CmsError as e:
        raise click.ClickException(str(e)) from e


def _check_slug(store, slug: str) -> None:
    try:
        store.path_for(slug)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="SLUG") from e


def _validate_date(click_ctx, param, value: str | None) -> str | None:
    """Accept only canonical YYYY-MM-DD dates so string order stays date order."""
    if value is None:
        return None
    try:
        parsed = datetime.strptime(value, DATE_FORMAT)
    except ValueError:
        parsed = None
    # strptime also takes unpadded fields like 2024-1-5
    if parsed is None or parsed.strftime(DATE_FORMAT) != value:
        raise click.BadParameter(f"Invalid date: {value!r}. Use YYYY-MM-DD.")
    return value


def _read_body(body: str | None, body_file) -> str | None:
    if body is not None and body_file is not None:
        raise click.UsageError("Use either --body or --body-file, not both.")
    if body_file is not None:
        return body_file.read()
    return body


@click.group(name="content")
def content() -> None:
    """List, show, create, edit and delete content items."""
    pass


@content.command(name="list")
@click.argument("type_slug", metavar="TYPE")
@click.option("-t", "--tag", default=None, help="Only items that also carry this tag")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def list_cmd(ctx, type_slug: str, tag: str | None, as_json: bool) -> None:
    """List items of a content type, newest first.

    \b
    Examples:
        mdcms content list notes
        mdcms content list notes --tag python
    """
    from mdcms.content.listing import list_content

    ct = _content_type(ctx, type_slug)
    try:
        listing = list_content(ctx.store(), ct, tag=tag)
    except CmsError as e:
        raise click.ClickException(str(e)) from e

    if as_json:
        click.echo(
            json_module.dumps(
                {
                    "contentType": ct.to_dict(),
                    "items": [item.to_dict() for item in listing.items],
                    "tags": listing.tags,
                },
                indent=2,
                ensure_ascii=False,
            )
        )
        return

    title = f"{ct.icon} {ct.name}"
    if tag:
        title += f" tagged '{tag}'"
    table = Table(title=escape(f"{title} ({len(listing.items)})"))
    table.add_column("Date", style="dim", no_wrap=True)
    table.add_column("Slug", style="cyan")
    table.add_column("Title")
    table.add_column("Tags", style="dim")

    for item in listing.items:
        table.add_row(
            item.date,
            escape(item.slug),
            escape(item.title),
            escape(", ".join(item.tags)),
        )

    console.print(table)
    if listing.tags:
        console.print(f"[dim]Other tags: {escape(', '.join(listing.tags))}[/dim]")


@content.command(name="show")
@click.argument("type_slug", metavar="TYPE")
@click.argument("slug")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def show_cmd(ctx, type_slug: str, slug: str, as_json: bool) -> None:
    """Show one item's metadata and body."""
    ct = _content_type(ctx, type_slug)
    store = ctx.store()
    _check_slug(store, slug)

    try:
        item = store.read(slug)
    except CmsError as e:
        raise click.ClickException(str(e)) from e
    item.type_slug = ct.slug

    if as_json:
        click.echo(json_module.dumps(item.to_dict(), indent=2, ensure_ascii=False))
        return

    console.print(f"[bold]{escape(item.title)}[/bold]")
    console.print(f"  [dim]Date:[/dim] {item.date}")
    console.print(f"  [dim]Tags:[/dim] {escape(', '.join(item.tags))}")
    if item.excerpt:
        console.print(f"  [dim]Excerpt:[/dim] {escape(item.excerpt)}")
    if item.cover_image:
        console.print(f"  [dim]Cover:[/dim] {escape(item.cover_image)}")
    console.print()
    if item.body:
        console.print(Markdown(item.body))


def _item_options(func):
    """Shared field options for new/edit."""
    options = [
        click.option("--title", default=None, help="Title"),
        click.option("--excerpt", default=None, help="Short summary"),
        click.option("--cover-image", default=None, help="Cover image path or URL"),
        click.option("--og-image", default=None, help="Open Graph image URL"),
        click.option(
            "--date",
            default=None,
            callback=_validate_date,
            help="Date (YYYY-MM-DD, default: today)",
        ),
        click.option("--body", default=None, help="Body text"),
        click.option(
            "--body-file",
            type=click.File("r", encoding="utf-8"),
            default=None,
            help="Read body from file ('-' for stdin)",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@content.command(name="new")
@click.argument("type_slug", metavar="TYPE")
@click.argument("slug")
@_item_options
@click.option("-t", "--tag", "tags", multiple=True, help="Tag (can repeat)")
@click.pass_obj
def new_cmd(
    ctx,
    type_slug: str,
    slug: str,
    title: str | None,
    excerpt: str | None,
    cover_image: str | None,
    og_image: str | None,
    date: str | None,
    body: str | None,
    body_file,
    tags: tuple[str, ...],
) -> None:
    """Create a new item. The type's own tag is added if missing.

    \b
    Examples:
        mdcms content new notes first-note --title "First note"
        mdcms content new notes draft --title Draft --tag python --body-file draft.md
    """
    ct = _content_type(ctx, type_slug, must_exist=False)
    store = ctx.store()
    _check_slug(store, slug)

    if store.exists(slug):
        raise click.ClickException(f"Content already exists: {slug}")

    tag_list = list(tags)
    if ct.filter_tag not in tag_list:
        tag_list.insert(0, ct.filter_tag)

    item = ContentItem(
        title=title or "",
        excerpt=excerpt or "",
        cover_image=cover_image or "",
        date=date or "",
        og_image=OGImage(url=og_image or ""),
        tags=tag_list,
        body=_read_body(body, body_file) or "",
        slug=slug,
        type_slug=ct.slug,
    )

    if ctx.dry_run:
        console.print(f"[dim]Would create: {store.path_for(slug)}[/dim]")
        return

    try:
        path = store.write(slug, item)
    except CmsError as e:
        raise click.ClickException(str(e)) from e
    console.print(f"[green]Content created:[/green] {path}")


@content.command(name="edit")
@click.argument("type_slug", metavar="TYPE")
@click.argument("slug")
@_item_options
@click.option("-t", "--tag", "tags", multiple=True, help="Replace all tags (can repeat)")
@click.option("--add-tag", multiple=True, help="Add a tag if not present (can repeat)")
@click.option("--remove-tag", multiple=True, help="Remove a tag (can repeat)")
@click.pass_obj
def edit_cmd(
    ctx,
    type_slug: str,
    slug: str,
    title: str | None,
    excerpt: str | None,
    cover_image: str | None,
    og_image: str | None,
    date: str | None,
    body: str | None,
    body_file,
    tags: tuple[str, ...],
    add_tag: tuple[str, ...],
    remove_tag: tuple[str, ...],
) -> None:
    """Update fields of an existing item and rewrite the file."""
    _content_type(ctx, type_slug)
    store = ctx.store()
    _check_slug(store, slug)

    try:
        item = store.read(slug)
    except CmsError as e:
        raise click.ClickException(str(e)) from e

    original = ContentItem(
        title=item.title,
        excerpt=item.excerpt,
        cover_image=item.cover_image,
        date=item.date,
        og_image=OGImage(url=item.og_image.url),
        tags=list(item.tags),
    )
    original_body = item.body

    for attr, value in (
        ("title", title),
        ("excerpt", excerpt),
        ("cover_image", cover_image),
        ("date", date),
    ):
        if value is not None:
            setattr(item, attr, value)
    if og_image is not None:
        item.og_image = OGImage(url=og_image)

    new_body = _read_body(body, body_file)
    if new_body is not None:
        item.body = new_body

    if tags:
        item.tags = list(tags)
    for tag in add_tag:
        if tag not in item.tags:
            item.tags.append(tag)
    for tag in remove_tag:
        item.tags = [t for t in item.tags if t != tag]

    if item == original and item.body == original_body:
        console.print("[dim]No changes[/dim]")
        return

    if ctx.dry_run:
        console.print(f"[dim]Would update: {store.path_for(slug)}[/dim]")
        return

    try:
        store.write(slug, item)
    except CmsError as e:
        raise click.ClickException(str(e)) from e
    console.print(f"[green]Updated:[/green] {slug}")


@content.command(name="delete")
@click.argument("type_slug", metavar="TYPE")
@click.argument("slug")
@click.option("-y", "--yes", is_flag=True, help="Delete without confirmation")
@click.pass_obj
def delete_cmd(ctx, type_slug: str, slug: str, yes: bool) -> None:
    """Delete an item's file."""
    _content_type(ctx, type_slug)
    store = ctx.store()
    _check_slug(store, slug)

    if not store.exists(slug):
        raise click.ClickException(f"Content not found: {slug}")

    if ctx.dry_run:
        console.print(f"[dim]Would delete: {store.path_for(slug)}[/dim]")
        return

    if not yes and not Confirm.ask(f"Delete {slug}?", default=False):
        console.print("[dim]Skipped[/dim]")
        return

    try:
        store.delete(slug)
    except CmsError as e:
        raise click.ClickException(str(e)) from e
    console.print(f"[green]Deleted:[/green] {slug}")
