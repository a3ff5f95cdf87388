"""Command-line interface using Typer."""

import asyncio
import webbrowser
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from socialcast import __version__
from socialcast.adapters.backend import ImageUpload, PosterRequest, get_backend
from socialcast.domain.callback import CallbackLocation
from socialcast.domain.catalog import PLATFORM_CATALOG
from socialcast.domain.models import (
    AiRecommended,
    ContentDraft,
    FixedTime,
    ImageRef,
    Immediate,
    PublishRequest,
    PublishResult,
    PublishSuccess,
    ScheduleSpec,
)
from socialcast.errors import SocialCastError
from socialcast.logging import setup_logging
from socialcast.services import (
    AccountLinkStore,
    ContentDraftSession,
    MediaStudio,
    OAuthHandshakeCoordinator,
    PostHistory,
    PublishFanoutCoordinator,
)

# Setup logging
setup_logging()

app = typer.Typer(
    name="socialcast",
    help="SocialCast - link social accounts and publish everywhere at once",
    add_completion=False,
)

accounts_app = typer.Typer(help="Linked account commands")
posts_app = typer.Typer(help="Post history commands")
media_app = typer.Typer(help="Poster and video generation commands")
app.add_typer(accounts_app, name="accounts")
app.add_typer(posts_app, name="posts")
app.add_typer(media_app, name="media")

console = Console()


def _fail(error: Exception) -> None:
    console.print(f"[bold red]Error: {error}[/bold red]")
    raise typer.Exit(code=1)


def _schedule(at: Optional[datetime], ai_schedule: bool) -> ScheduleSpec:
    if ai_schedule:
        return AiRecommended()
    if at is not None:
        return FixedTime(at)
    return Immediate()


def _print_results(results: PublishResult) -> None:
    table = Table(title="Publishing Results")
    table.add_column("Platform", style="cyan")
    table.add_column("Status")
    table.add_column("Details")

    for platform, outcome in sorted(results.items()):
        if isinstance(outcome, PublishSuccess):
            table.add_row(platform, "[green]success[/green]", outcome.post_url or "")
        else:
            table.add_row(platform, "[red]error[/red]", outcome.error_message)

    console.print(table)


async def _publish(
    draft: ContentDraft,
    platforms: list[str],
    schedule: ScheduleSpec,
) -> PublishResult:
    backend = get_backend()
    store = AccountLinkStore()
    await OAuthHandshakeCoordinator(backend, store).refresh()
    fanout = PublishFanoutCoordinator(backend, store)
    return await fanout.publish(
        PublishRequest(draft=draft, target_platforms=frozenset(platforms), schedule=schedule)
    )


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"SocialCast v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """SocialCast - link accounts, generate content, publish everywhere."""
    pass


@accounts_app.command("list")
def accounts_list() -> None:
    """Show every platform and whether it is linked."""

    async def _run() -> AccountLinkStore:
        store = AccountLinkStore()
        await OAuthHandshakeCoordinator(get_backend(), store).refresh()
        return store

    try:
        store = asyncio.run(_run())
    except SocialCastError as e:
        _fail(e)

    table = Table(title="Connected Accounts")
    table.add_column("Platform", style="cyan")
    table.add_column("Name")
    table.add_column("Status")

    for descriptor in PLATFORM_CATALOG:
        account = store.get(descriptor.id)
        if store.is_connected(descriptor.id):
            status = f"[green]Connected as {(account and account.display_name) or 'User'}[/green]"
        else:
            status = "[dim]Not connected[/dim]"
        table.add_row(descriptor.id, descriptor.display_name, status)

    console.print(table)


@accounts_app.command("link")
def accounts_link(
    platform: str = typer.Argument(..., help="Platform id (e.g. twitter, instagram)"),
    open_browser: bool = typer.Option(False, "--open", help="Open the URL in a browser"),
) -> None:
    """Start linking a platform and print the authorization URL."""
    coordinator = OAuthHandshakeCoordinator(get_backend(), AccountLinkStore())

    try:
        url = asyncio.run(coordinator.begin_link(platform))
    except SocialCastError as e:
        _fail(e)

    console.print(f"[bold blue]Authorize {platform} at:[/bold blue]\n{url}")
    console.print("[dim]Then run: socialcast accounts complete '<the URL you were sent back to>'[/dim]")
    if open_browser:
        webbrowser.open(url)


@accounts_app.command("complete")
def accounts_complete(
    callback_url: str = typer.Argument(..., help="The URL the identity provider redirected to"),
) -> None:
    """Finish linking from the URL the identity provider sent you back to."""
    coordinator = OAuthHandshakeCoordinator(get_backend(), AccountLinkStore())
    location = CallbackLocation(callback_url)

    try:
        account = asyncio.run(coordinator.handle_return(location))
    except SocialCastError as e:
        _fail(e)

    if account is None:
        console.print("[yellow]No pending authorization found in that URL.[/yellow]")
        raise typer.Exit(code=1)

    console.print(
        f"[bold green]✓ Linked {account.platform}[/bold green]"
        + (f" as {account.display_name}" if account.display_name else "")
    )


@accounts_app.command("disconnect")
def accounts_disconnect(
    platform: str = typer.Argument(..., help="Platform id to unlink"),
) -> None:
    """Unlink a platform."""
    coordinator = OAuthHandshakeCoordinator(get_backend(), AccountLinkStore())

    try:
        asyncio.run(coordinator.disconnect(platform))
    except SocialCastError as e:
        _fail(e)

    console.print(f"[green]Disconnected {platform}[/green]")


@app.command()
def publish(
    text: str = typer.Option("", "--text", "-t", help="Caption text"),
    images: list[str] = typer.Option([], "--image", "-i", help="Image URL (first is primary)"),
    platforms: list[str] = typer.Option(..., "--platform", "-p", help="Target platform id"),
    at: Optional[datetime] = typer.Option(None, "--at", help="Publish at this time (UTC if naive)"),
    ai_schedule: bool = typer.Option(False, "--ai-schedule", help="Let the backend pick the time"),
) -> None:
    """Publish a hand-written post to several platforms."""
    session = ContentDraftSession()
    draft = session.start_manual(text, [ImageRef(url=url) for url in images])

    try:
        results = asyncio.run(_publish(draft, platforms, _schedule(at, ai_schedule)))
    except SocialCastError as e:
        _fail(e)

    _print_results(results)


@app.command()
def generate(
    topic: str = typer.Argument(..., help="What the post should be about"),
    keywords: list[str] = typer.Option([], "--keyword", "-k", help="Keyword to steer generation"),
    select: Optional[int] = typer.Option(None, "--select", "-s", help="Option number to publish"),
    primary_image: int = typer.Option(1, "--image", help="Image number to use as primary"),
    platforms: list[str] = typer.Option([], "--platform", "-p", help="Target platform id"),
    at: Optional[datetime] = typer.Option(None, "--at", help="Publish at this time (UTC if naive)"),
    ai_schedule: bool = typer.Option(False, "--ai-schedule", help="Let the backend pick the time"),
) -> None:
    """Generate post options, and optionally publish one of them."""
    session = ContentDraftSession(get_backend())
    for keyword in keywords:
        session.toggle_keyword(keyword)

    console.print(f"[bold blue]Generating content for:[/bold blue] {topic}")
    try:
        options = asyncio.run(session.generate(topic)) or []
    except SocialCastError as e:
        _fail(e)

    table = Table(title="Generated Options")
    table.add_column("#", style="cyan")
    table.add_column("Caption")
    table.add_column("Images")
    table.add_column("Hashtags")
    for number, option in enumerate(options, start=1):
        table.add_row(str(number), option.text[:80], str(len(option.images)), " ".join(option.hashtags))
    console.print(table)

    if select is None:
        return
    if not platforms:
        _fail(typer.BadParameter("--platform is required with --select"))

    try:
        session.select(select - 1)
        if session.selected and session.selected.images:
            session.promote_image(primary_image - 1)
        results = asyncio.run(
            _publish(session.selected, platforms, _schedule(at, ai_schedule))
        )
    except SocialCastError as e:
        _fail(e)

    _print_results(results)


@posts_app.command("list")
def posts_list() -> None:
    """List past posts."""
    try:
        records = asyncio.run(PostHistory(get_backend()).list())
    except SocialCastError as e:
        _fail(e)

    if not records:
        console.print("[dim]No posts yet.[/dim]")
        return

    table = Table(title="Post History")
    table.add_column("ID", style="dim")
    table.add_column("Text")
    table.add_column("Platforms")
    table.add_column("Created")

    for record in records:
        statuses = []
        for platform in record.platforms:
            outcome = record.outcome_for(platform)
            label = outcome.status if outcome else "pending"
            statuses.append(f"{platform}: {label}")
        table.add_row(
            record.id[:12],
            (record.text or "No text content")[:60],
            ", ".join(statuses),
            record.created_at.strftime("%Y-%m-%d %H:%M") if record.created_at else "-",
        )

    console.print(table)


@posts_app.command("delete")
def posts_delete(
    post_id: str = typer.Argument(..., help="Post ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a post from history."""
    if not yes and not typer.confirm(f"Delete post {post_id}?"):
        raise typer.Exit()

    try:
        asyncio.run(PostHistory(get_backend()).delete(post_id))
    except SocialCastError as e:
        _fail(e)

    console.print(f"[green]Deleted post {post_id}[/green]")


@media_app.command("video")
def media_video(
    topic: str = typer.Argument(..., help="Video topic"),
) -> None:
    """Generate a script for a short video and render it."""
    studio = MediaStudio(get_backend())

    async def _run() -> str:
        scenes = await studio.draft_script(topic)
        for number, scene in enumerate(scenes, start=1):
            console.print(f"[cyan]Scene {number}:[/cyan] {scene.narration}")
        console.print("[dim]Rendering video, this can take several minutes...[/dim]")
        return await studio.render()

    try:
        url = asyncio.run(_run())
    except SocialCastError as e:
        _fail(e)

    console.print(f"[bold green]✓ Video ready:[/bold green] {url}")


@media_app.command("poster")
def media_poster(
    product_image: Path = typer.Argument(..., exists=True, dir_okay=False, help="Product image"),
    heading: str = typer.Option("", "--heading"),
    offer: str = typer.Option("", "--offer"),
    contact: str = typer.Option("", "--contact"),
    tagline: str = typer.Option("", "--tagline"),
    keywords: list[str] = typer.Option([], "--keyword", "-k"),
) -> None:
    """Generate a marketing poster from a product image."""
    request = PosterRequest(
        product_image=ImageUpload(filename=product_image.name, data=product_image.read_bytes()),
        heading=heading,
        offer=offer,
        contact=contact,
        tagline=tagline,
        keywords=list(keywords),
    )

    try:
        url = asyncio.run(MediaStudio(get_backend()).create_poster(request))
    except SocialCastError as e:
        _fail(e)

    console.print(f"[bold green]✓ Poster ready:[/bold green] {url}")


if __name__ == "__main__":
    app()
