"""Command-line interface for Postmatter.

This module defines the CLI commands using Click framework.
It provides commands for validating content files, listing documents and
scaffolding new posts.

Commands:
- check: Validate content files and report every failure.
- list: List documents, newest first.
- new: Create a new post with a valid front matter block.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
import questionary

from . import __version__
from .config import content_dir, load_config
from .document import ContentDocument
from .errors import DocumentError
from .loader import FileDocumentLoader, load_directory
from .parser import dump, load
from .utils import now_with_offset, slugify


@click.group()
@click.version_option(version=__version__, prog_name="postmatter")
@click.option("-v", "--verbose", is_flag=True, help="Show debug output")
def cli(verbose: bool):
    """Postmatter content document tools."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.ERROR,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("paths", nargs=-1, type=click.Path(exists=True, path_type=Path))
def check(paths: tuple[Path, ...]):
    """Validate content files and report every failure."""
    project_root = Path.cwd()
    targets = list(paths)
    if not targets:
        default_dir = content_dir(project_root)
        if not default_dir.is_dir():
            raise click.ClickException(
                f"No content directory found at {_display(default_dir, project_root)}"
            )
        targets = [default_dir]

    checked = 0
    errors: list[DocumentError] = []
    for target in targets:
        if target.is_dir():
            result = load_directory(target, include_drafts=True)
            checked += len(result.documents) + len(result.errors)
            errors.extend(result.errors)
            continue
        checked += 1
        try:
            load(target)
        except DocumentError as exc:
            errors.append(exc)

    if errors:
        click.echo(
            click.style(f"{len(errors)} of {checked} files failed:", fg="red", bold=True),
            err=True,
        )
        for exc in errors:
            location = _display(exc.source_path, project_root) if exc.source_path else "?"
            if exc.line is not None:
                location = f"{location}:{exc.line}"
            click.echo(click.style(f"  File: {location}", fg="yellow"), err=True)
            click.echo(click.style(f"  Error: {exc.message}", fg="white"), err=True)
        raise SystemExit(1)
    click.echo(f"Checked {checked} files, all valid")


@cli.command("list")
@click.option("--drafts", is_flag=True, help="Include draft content")
def list_documents(drafts: bool):
    """List documents, newest first."""
    project_root = Path.cwd()
    directory = content_dir(project_root)
    if not directory.is_dir():
        raise click.ClickException(
            f"No content directory found at {_display(directory, project_root)}"
        )
    result = load_directory(directory, include_drafts=drafts)
    for document in result.documents.sorted():
        marker = click.style(" [draft]", fg="yellow") if document.draft else ""
        click.echo(f"{document.published_at:%Y-%m-%d}  {document.title}{marker}")
    if result.errors:
        click.echo(
            click.style(
                f"{len(result.errors)} files could not be parsed; run 'postmatter check'",
                fg="red",
            ),
            err=True,
        )


@cli.command()
@click.option("--title", help="Title of the new post")
@click.option(
    "--draft/--no-draft",
    default=None,
    help="Mark the post as a draft (overrides postmatter.yaml new_drafts)",
)
@click.option("--section", default="", help="Subfolder of the content directory")
def new(title: str | None, draft: bool | None, section: str):
    """Create a new post with a valid front matter block."""
    project_root = Path.cwd()
    config = load_config(project_root)
    directory = content_dir(project_root, config)

    if title is None:
        title = questionary.text(
            "Title:",
            validate=lambda x: len(x.strip()) > 0 or "Title cannot be empty",
            style=_questionary_style(),
        ).ask()
        if title is None:
            raise click.Abort()
    title = title.strip()
    if not title:
        raise click.ClickException("Title cannot be empty")

    if draft is None:
        draft = bool(config["new_drafts"])

    published_at = now_with_offset()
    slug = slugify(title)
    if config["date_prefix"]:
        filename = f"{published_at:%Y-%m-%d}-{slug}.md"
    else:
        filename = f"{slug}.md"
    target_dir = directory / section if section else directory
    target_path = target_dir / filename

    if target_path.exists():
        raise click.ClickException(
            f"File already exists: {_display(target_path, project_root)}"
        )

    # Same slug under a different date prefix is still a collision
    if target_dir.exists():
        for existing in FileDocumentLoader(target_dir).iter_files():
            if existing.parent == target_dir and slugify(existing.stem) == slug:
                raise click.ClickException(
                    f"A file with slug '{slug}' already exists: {existing.name}"
                )

    document = ContentDocument(title=title, published_at=published_at, draft=draft)
    dump(document, target_path)
    click.echo(f"Created {_display(target_path, project_root)}")


def _display(path: Path, project_root: Path) -> str:
    """Show a path relative to the project root when it lives inside it."""
    try:
        return str(path.resolve().relative_to(project_root.resolve()))
    except ValueError:
        return str(path)


def _questionary_style():
    """Return consistent questionary style."""
    return questionary.Style(
        [
            ("qmark", "fg:cyan bold"),
            ("question", "bold"),
            ("answer", "fg:cyan"),
            ("pointer", "fg:cyan bold"),
            ("highlighted", "fg:cyan bold"),
            ("selected", "fg:cyan"),
        ]
    )


def main():
    """Entry point for the CLI application."""
    cli()
