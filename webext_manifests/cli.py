"""webext-manifests CLI: register native manifests with Firefox."""

import json
import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from webext_manifests import __version__
from webext_manifests.errors import RegistrationError
from webext_manifests.models.kinds import ManifestKind, Visibility
from webext_manifests.paths import Platform

console = Console()
err_console = Console(stderr=True)

KIND_CHOICE = click.Choice([k.value for k in ManifestKind])
PLATFORM_CHOICE = click.Choice([p.value for p in Platform])


def _scope_option(func):
    return click.option(
        "--global/--user",
        "is_global",
        default=False,
        help="Register machine-wide instead of for the current user",
    )(func)


def _platform_options(func):
    func = click.option(
        "--home",
        type=click.Path(file_okay=False, path_type=str),
        default=None,
        help="Home directory used for per-user registrations",
    )(func)
    func = click.option(
        "--platform",
        "platform_name",
        type=PLATFORM_CHOICE,
        default=None,
        help="Target platform layout (default: detected)",
    )(func)
    return func


def _registrar(platform_name: str | None, home: str | None):
    from webext_manifests.registration import Registrar

    platform = Platform(platform_name) if platform_name else None
    return Registrar(platform=platform, home=home)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Log resolved paths and destinations")
def main(verbose: bool):
    """Publish native manifests where Firefox finds them.

    Supports native messaging hosts, managed storage and PKCS #11 modules.
    """
    _setup_logging(verbose)


# ── Register ─────────────────────────────────────────────────────────


@main.command()
@click.argument("kind", type=KIND_CHOICE)
@click.argument("manifest_path", type=click.Path(dir_okay=False, path_type=str))
@_scope_option
@_platform_options
def register(kind: str, manifest_path: str, is_global: bool, platform_name: str | None, home: str | None):
    """Register MANIFEST_PATH as a KIND manifest.

    On macOS and Linux the manifest is copied into the Mozilla directories
    with its path made absolute; on Windows a registry key pointing at the
    file is created.
    """
    visibility = Visibility.GLOBAL if is_global else Visibility.PER_USER

    try:
        registrar = _registrar(platform_name, home)
        publication = registrar.register(ManifestKind(kind), visibility, manifest_path)
    except RegistrationError as e:
        err_console.print(f"[red]Registration failed:[/] {escape(str(e))}")
        sys.exit(1)

    console.print(f"[green]Registered[/] [cyan]{publication.name}[/] ({kind}, {visibility.value})")
    console.print(f"  {escape(publication.destination)}", soft_wrap=True)


# ── Validate ─────────────────────────────────────────────────────────


@main.command()
@click.argument("kind", type=KIND_CHOICE)
@click.argument("manifest_path", type=click.Path(dir_okay=False, path_type=str))
def validate(kind: str, manifest_path: str):
    """Check MANIFEST_PATH against the KIND manifest format without registering it."""
    from webext_manifests.utils.validator import validate_manifest_file

    issues = validate_manifest_file(manifest_path, ManifestKind(kind))
    if issues:
        console.print(f"[red]Invalid {kind} manifest:[/] {escape(manifest_path)}", soft_wrap=True)
        for issue in issues:
            console.print(f"  [red]x[/] {escape(issue)}")
        sys.exit(1)

    console.print(f"[green]Valid![/] {escape(manifest_path)}", soft_wrap=True)


# ── Locate ───────────────────────────────────────────────────────────


@main.command()
@click.argument("kind", type=KIND_CHOICE)
@click.argument("name")
@_scope_option
@_platform_options
def locate(kind: str, name: str, is_global: bool, platform_name: str | None, home: str | None):
    """Show where a KIND manifest called NAME would be published."""
    visibility = Visibility.GLOBAL if is_global else Visibility.PER_USER

    try:
        destination = _registrar(platform_name, home).locate(ManifestKind(kind), visibility, name)
    except RegistrationError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        sys.exit(1)

    console.print(destination, highlight=False, soft_wrap=True)


@main.command(name="folders")
def list_folders():
    """List the destination folder used for every kind on every platform."""
    from webext_manifests.paths import kind_folder

    table = Table(title="Manifest folders")
    table.add_column("Kind", style="cyan")
    for platform in Platform:
        table.add_column(platform.value)

    for kind in ManifestKind:
        table.add_row(kind.value, *(kind_folder(p, kind) for p in Platform))

    console.print(table)


# ── Schema ───────────────────────────────────────────────────────────


@main.command(name="schema")
@click.argument("kind", type=KIND_CHOICE)
def dump_schema(kind: str):
    """Print the JSON Schema for KIND manifests."""
    from webext_manifests.spec.schema import get_schema

    click.echo(json.dumps(get_schema(ManifestKind(kind)), indent=2))


if __name__ == "__main__":
    main()
