#!/usr/bin/env python3
"""CLI entry point for the Readwise to Org sync."""

import argparse
import sys
from pathlib import Path

from rich.table import Table

from .core.auth import CredentialResolver
from .core.client import ReadwiseClient
from .core.operations import SyncOperations
from .core.router import RecordRouter
from .errors import AuthError, ReadwiseAPIError
from .logger import console, setup_logging
from .models.config import AUTH_BACKENDS, AuthSettings, SyncConfig

DEFAULT_CONFIG_PATH = Path("readwise-sync.yaml")


def load_config(args: argparse.Namespace) -> SyncConfig:
    """Load config from --config (if present) and apply CLI overrides."""
    config = SyncConfig.load(args.config)

    if getattr(args, "output_dir", None):
        config.output_dir = args.output_dir
    if getattr(args, "auth_backend", None):
        config.auth = AuthSettings(
            backend=args.auth_backend,
            host=config.auth.host,
            authinfo_files=config.auth.authinfo_files,
            pass_entry=config.auth.pass_entry,
        )
    if getattr(args, "debug", False):
        config.settings.debug = True
    if getattr(args, "no_reindex", False):
        config.reindex_command = None

    return config


def cmd_sync(args: argparse.Namespace) -> int:
    """Export all highlights into Org files."""
    try:
        config = load_config(args)
    except ValueError as e:
        console.print(f"[red]Configuration error: {e}")
        return 1

    setup_logging(debug=config.settings.debug)
    console.print(f"Syncing Readwise highlights to {config.output_path}...", style="blue")

    ops = SyncOperations(config)
    try:
        result = ops.sync()
    except AuthError as e:
        console.print(f"[red]Authentication failed: {e}")
        return 1

    if not result.success:
        console.print(f"[red]FAILED: {result.message}")
        return 1

    console.print(f"[green]{result.message}")
    reindex = "yes" if result.reindexed else "no"
    console.print(
        f"\n[bold]Summary:[/bold] {result.documents} documents, "
        f"{result.pages} pages, reindexed: {reindex}"
    )
    return 0


def cmd_verify_auth(args: argparse.Namespace) -> int:
    """Verify API authentication."""
    try:
        config = load_config(args)
    except ValueError as e:
        console.print(f"[red]Configuration error: {e}")
        return 1

    setup_logging(debug=config.settings.debug)
    console.print("Verifying Readwise API token...", style="blue")

    try:
        token = CredentialResolver(config.auth).get_token()
        client = ReadwiseClient(base_url=config.base_url, timeout=config.settings.timeout)
        if client.verify_token(token):
            console.print("[green]Authentication successful!")
            return 0
        console.print("[red]Authentication failed: unexpected response from Readwise")
    except AuthError as e:
        console.print(f"[red]Authentication failed: {e}")
    except ReadwiseAPIError as e:
        if e.unauthorized:
            console.print("[red]Authentication failed: Unauthorized. Check your API token.")
        else:
            console.print(f"[red]Authentication failed: {e}")

    return 1


def cmd_status(args: argparse.Namespace) -> int:
    """Show what is currently on disk."""
    try:
        config = load_config(args)
    except ValueError as e:
        console.print(f"[red]Configuration error: {e}")
        return 1

    root = config.output_path
    console.print(f"\n[bold]Output Directory:[/bold] {root}")
    console.print(f"[bold]Auth Backend:[/bold] {config.auth.backend}")
    reindex = " ".join(config.reindex_command) if config.reindex_command else "None"
    console.print(f"[bold]Reindex Command:[/bold] {reindex}")

    if not root.is_dir():
        console.print("[dim]Nothing synced yet. Run 'sync' to start.[/dim]")
        return 0

    categories = sorted(p for p in root.iterdir() if p.is_dir())
    if not categories:
        console.print("[dim]Nothing synced yet. Run 'sync' to start.[/dim]")
        return 0

    table = Table()
    table.add_column("Category")
    table.add_column("Files", justify="right")

    total = 0
    for category in categories:
        count = len(list(category.glob(f"*{RecordRouter.FILE_EXTENSION}")))
        total += count
        table.add_row(category.name, str(count))

    console.print(table)
    console.print(f"[bold]Total Files:[/bold] {total}")
    return 0


def cmd_init_config(args: argparse.Namespace) -> int:
    """Write a default config file."""
    config_path = args.config or DEFAULT_CONFIG_PATH

    if config_path.exists() and not args.force:
        console.print(f"[yellow]Config already exists: {config_path}")
        console.print("Use --force to overwrite.")
        return 1

    config = SyncConfig(reindex_command=["emacsclient", "--eval", "(org-roam-db-sync)"])
    config.save(config_path)
    console.print(f"[green]Wrote {config_path}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="readwise-sync",
        description="Export Readwise highlights as Org-roam outline files",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help=f"YAML config file (default: {DEFAULT_CONFIG_PATH} if present)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # sync command
    sync_parser = subparsers.add_parser("sync", help="Export all highlights to Org files")
    sync_parser.add_argument("--output-dir", help="Output root directory")
    sync_parser.add_argument("--auth-backend", choices=AUTH_BACKENDS, help="Where to look up the token")
    sync_parser.add_argument("--debug", action="store_true", help="Log every written file")
    sync_parser.add_argument("--no-reindex", action="store_true", help="Skip the reindex command")

    # verify-auth command
    verify_parser = subparsers.add_parser("verify-auth", help="Verify API authentication")
    verify_parser.add_argument("--auth-backend", choices=AUTH_BACKENDS, help="Where to look up the token")

    # status command
    subparsers.add_parser("status", help="Show synced files per category")

    # init-config command
    init_parser = subparsers.add_parser("init-config", help="Write a default config file")
    init_parser.add_argument("--force", action="store_true", help="Overwrite existing config")

    args = parser.parse_args(argv)

    if args.config is None and DEFAULT_CONFIG_PATH.exists() and args.command != "init-config":
        args.config = DEFAULT_CONFIG_PATH

    if args.command == "sync":
        return cmd_sync(args)
    elif args.command == "verify-auth":
        return cmd_verify_auth(args)
    elif args.command == "status":
        return cmd_status(args)
    elif args.command == "init-config":
        return cmd_init_config(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
