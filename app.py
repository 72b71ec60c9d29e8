#!/usr/bin/env python3

import sys
from typing import NoReturn

import click
from dotenv import load_dotenv
from pydantic import ValidationError

from modcheck.config import get_settings
from modcheck.error_details import get_error_human_message
from modcheck.errors import ChecklistError
from modcheck.store import ChecklistStore
from modcheck.types import format_path
from modcheck.utils.logging import setup_logging

HANDLED_ERRORS = (ChecklistError, OSError, ValueError)


def default_file() -> str:
    try:
        return get_settings().checklist.file
    except ValidationError as e:
        fail(e)


def file_option(func):
    return click.option(
        "--file",
        "-f",
        "filepath",
        type=click.Path(dir_okay=False),
        default=default_file,
        show_default="MODCHECK_FILE or CHECKLIST.md",
        help="Checklist Markdown file",
    )(func)


def open_store(filepath: str) -> ChecklistStore:
    try:
        return ChecklistStore.load_file(filepath)
    except HANDLED_ERRORS as e:
        fail(e)


def fail(error: Exception) -> NoReturn:
    click.echo(f"Error: {get_error_human_message(error)}", err=True)
    sys.exit(1)


@click.group(invoke_without_command=True)
@click.pass_context
def cli(ctx) -> None:
    """Modcheck - Modernization Checklist Tracker"""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@file_option
def show(filepath) -> None:
    """List checklist items with their paths"""
    store = open_store(filepath)
    for index, section in enumerate(store.document.sections):
        title = section.title or "(untitled)"
        click.echo(f"{index} {title} [{store.count_progress(index)}]")
        for path, item in store.iter_items(index):
            depth = len(path) - 2
            box = "x" if item.checked else " "
            click.echo(f"{'  ' * (depth + 1)}[{box}] {format_path(path)} {item.text}")


@cli.command()
@file_option
@click.option("--section", "-s", type=int, default=None, help="Section index")
@click.option(
    "--leaves-only/--all-items",
    default=None,
    help="Count only items without sub-items (default: MODCHECK_LEAVES_ONLY)",
)
def progress(filepath, section, leaves_only) -> None:
    """Show checked/total counts"""
    store = open_store(filepath)
    try:
        if section is not None:
            click.echo(str(store.count_progress(section, leaves_only=leaves_only)))
            return

        for index, sec in enumerate(store.document.sections):
            title = sec.title or "(untitled)"
            click.echo(f"{index} {title}: {store.count_progress(index, leaves_only=leaves_only)}")
        click.echo(f"Total: {store.count_progress(leaves_only=leaves_only)}")
    except HANDLED_ERRORS as e:
        fail(e)


def _set_paths(filepath: str, paths: tuple[str, ...], value: bool) -> None:
    store = open_store(filepath)
    try:
        # Resolve every path before touching anything so a bad path changes nothing
        for path in paths:
            store.get_item(path)
        for path in paths:
            item = store.set_checked(path, value)
            click.echo(f"{'Checked' if value else 'Unchecked'} {path} {item.text}")
        store.save()
    except HANDLED_ERRORS as e:
        fail(e)


@cli.command()
@file_option
@click.argument("paths", nargs=-1, required=True)
def check(filepath, paths) -> None:
    """Mark items as done, e.g. `check 0.1 2.0.3`"""
    _set_paths(filepath, paths, True)


@cli.command()
@file_option
@click.argument("paths", nargs=-1, required=True)
def uncheck(filepath, paths) -> None:
    """Mark items as not done"""
    _set_paths(filepath, paths, False)


@cli.command()
@file_option
@click.argument("query")
def find(filepath, query) -> None:
    """Search item labels"""
    store = open_store(filepath)
    matches = store.find_items(query)
    if not matches:
        click.echo(f"No items matching '{query}'")
        return
    for path, item in matches:
        box = "x" if item.checked else " "
        click.echo(f"[{box}] {format_path(path)} {item.text}")


@cli.command()
@file_option
def export(filepath) -> None:
    """Print the checklist as JSON"""
    store = open_store(filepath)
    click.echo(store.to_json())


@cli.command()
@file_option
def reset(filepath) -> None:
    """Uncheck every item"""
    store = open_store(filepath)
    try:
        count = store.reset()
        store.save()
    except HANDLED_ERRORS as e:
        fail(e)
    click.echo(f"Unchecked {count} items")


def main() -> None:
    load_dotenv()
    try:
        get_settings()
        setup_logging()
    except ValidationError as e:
        fail(e)
    cli()


if __name__ == "__main__":
    main()
