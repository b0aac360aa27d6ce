"""Command-line interface."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Annotated, Any

import typer
import yaml
from ruamel.yaml import YAML

from docnav import __version__
from docnav.config import SiteConfig, load_config
from docnav.config.plugin import PLUGIN_NAME, sidebar_target
from docnav.navigation import (
    Dir,
    Group,
    Link,
    SidebarEntry,
    build_page_navigation,
    sort_dir_entries,
    treeify,
)
from docnav.paths import ensure_leading_and_trailing_slashes
from docnav.routes import CollectResult, collect_routes

Logger = Callable[..., None]


def _make_logger(quiet: bool, verbose: bool = False) -> tuple[Logger, Logger]:
    """Create log and log_verbose functions for CLI output.

    Args:
        quiet: If True, suppress all output.
        verbose: If True, enable verbose logging (quiet overrides this).

    Returns:
        Tuple of (log, log_verbose) functions.
    """
    effective_verbose = verbose and not quiet

    def log(msg: str, color: str | None = None, err: bool = False) -> None:
        if not quiet:
            typer.secho(msg, fg=color, err=err)

    def log_verbose(msg: str, color: str | None = None, err: bool = False) -> None:
        if effective_verbose:
            typer.secho(msg, fg=color, err=err)

    return log, log_verbose


def version_callback(value: bool) -> None:
    """Print version and exit if --version flag is set."""
    if value:
        typer.echo(f"docnav {__version__}")
        raise typer.Exit()


app = typer.Typer(
    help="Build documentation sidebars and previous/next links.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

ConfigOption = Annotated[
    Path,
    typer.Option("--config", "-c", help="Path to docnav.yml or mkdocs.yml"),
]
QuietOption = Annotated[
    bool,
    typer.Option("--quiet", "-q", help="Suppress output (exit code only)"),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Show detailed progress"),
]
JsonOption = Annotated[
    bool,
    typer.Option("--json", help="Print JSON instead of text"),
]


@app.callback(invoke_without_command=True)
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """Build documentation sidebars and previous/next links."""


def _load_site(config: Path, log: Logger) -> tuple[SiteConfig, CollectResult]:
    """Load config and routes, exiting with status 1 on failure."""
    try:
        cfg = load_config(config)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        log(f"Error loading config: {e}", color="red", err=True)
        raise typer.Exit(1) from None

    try:
        collected = collect_routes(cfg.docs_dir)
    except FileNotFoundError as e:
        log(f"Error: {e}", color="red", err=True)
        log(
            "Hint: Set 'docs_dir' in your config to the content directory.",
            color="yellow",
            err=True,
        )
        raise typer.Exit(1) from None

    return cfg, collected


def _report_skipped(collected: CollectResult, log_verbose: Logger) -> None:
    if collected.skipped:
        log_verbose("Skipped files:", color="yellow", err=True)
        for path, reason in collected.skipped:
            log_verbose(f"- {path} ({reason})", color="yellow", err=True)


def _echo_json(data: Any) -> None:
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))


def _format_link(link: Link) -> str:
    text = f"{link.label} -> {link.href}"
    if link.badge:
        text += f" [{link.badge.text}]"
    return text


def _print_entries(entries: list[SidebarEntry], log: Logger, depth: int = 0) -> None:
    indent = "  " * depth
    for entry in entries:
        if isinstance(entry, Group):
            marker = "+" if entry.collapsed else "-"
            badge = f" [{entry.badge.text}]" if entry.badge else ""
            log(f"{indent}{marker} {entry.label}{badge}", color="blue")
            _print_entries(entry.entries, log, depth + 1)
        elif entry.is_current:
            log(f"{indent}* {_format_link(entry)} (current)", color="green")
        else:
            log(f"{indent}  {_format_link(entry)}")


@app.command()
def sidebar(
    path: Annotated[str, typer.Argument(help="Path of the active page, e.g. /guides/")],
    config: ConfigOption = Path("docnav.yml"),
    as_json: JsonOption = False,
    quiet: QuietOption = False,
    verbose: VerboseOption = False,
) -> None:
    """Print the sidebar for a page."""
    log, log_verbose = _make_logger(quiet, verbose)
    cfg, collected = _load_site(config, log)

    log_verbose(f"Site: {cfg.site_name}", err=True)
    log_verbose(f"Routes: {len(collected.routes)}", err=True)
    log_verbose(
        "Sidebar: " + ("configured" if cfg.sidebar is not None else "auto"), err=True
    )
    _report_skipped(collected, log_verbose)

    page = build_page_navigation(path, collected.routes, cfg)
    if as_json:
        _echo_json([entry.to_dict() for entry in page.sidebar])
        return
    _print_entries(page.sidebar, log)


@app.command()
def pagination(
    path: Annotated[str, typer.Argument(help="Path of the active page, e.g. /guides/")],
    config: ConfigOption = Path("docnav.yml"),
    as_json: JsonOption = False,
    quiet: QuietOption = False,
    verbose: VerboseOption = False,
) -> None:
    """Print the previous and next links for a page."""
    log, log_verbose = _make_logger(quiet, verbose)
    cfg, collected = _load_site(config, log)
    _report_skipped(collected, log_verbose)

    page = build_page_navigation(path, collected.routes, cfg)
    if page.route is None:
        log(f"Warning: no page found at {page.pathname}", color="yellow", err=True)
    if not cfg.pagination:
        log_verbose("Pagination is disabled site-wide", err=True)

    if as_json:
        data = page.to_dict()
        _echo_json({"prev": data["prev"], "next": data["next"]})
        return
    log(f"Previous: {_format_link(page.prev) if page.prev else '(none)'}")
    log(f"Next: {_format_link(page.next) if page.next else '(none)'}")


@app.command()
def routes(
    config: ConfigOption = Path("docnav.yml"),
    as_json: JsonOption = False,
    quiet: QuietOption = False,
    verbose: VerboseOption = False,
) -> None:
    """List the pages collected from the docs directory."""
    log, log_verbose = _make_logger(quiet, verbose)
    _, collected = _load_site(config, log)
    _report_skipped(collected, log_verbose)

    if as_json:
        _echo_json(
            [
                {
                    "id": route.id,
                    "slug": route.slug,
                    "title": route.title,
                    "order": route.sidebar.order,
                    "hidden": route.sidebar.hidden,
                }
                for route in collected.routes
            ]
        )
        return

    for route in collected.routes:
        flags = []
        if route.sidebar.order is not None:
            flags.append(f"order={route.sidebar.order:g}")
        if route.sidebar.hidden:
            flags.append("hidden")
        suffix = f" ({', '.join(flags)})" if flags else ""
        log(f"/{route.slug}  {route.title}  [{route.id}]{suffix}")


@app.command()
def validate(
    config: ConfigOption = Path("docnav.yml"),
    quiet: QuietOption = False,
    verbose: VerboseOption = False,
) -> None:
    """Check config file and docs validity."""
    log, log_verbose = _make_logger(quiet, verbose)

    try:
        cfg = load_config(config)
    except FileNotFoundError:
        log(f"Config invalid: {config}", color="red", err=True)
        log(f"  Error: File not found: {config}", color="red", err=True)
        raise typer.Exit(1) from None
    except (ValueError, yaml.YAMLError) as e:
        log(f"Config invalid: {config}", color="red", err=True)
        log(f"  Error: {e}", color="red", err=True)
        raise typer.Exit(1) from None

    try:
        collected = collect_routes(cfg.docs_dir)
    except FileNotFoundError as e:
        log(f"Config invalid: {config}", color="red", err=True)
        log(f"  Error: {e}", color="red", err=True)
        raise typer.Exit(1) from None

    hidden = sum(1 for route in collected.routes if route.sidebar.hidden)

    log(f"Config valid: {config}", color="green")
    log(f"  Site: {cfg.site_name}")
    log(f"  Sidebar: {'configured' if cfg.sidebar is not None else 'auto'}")
    log(f"  Pages: {len(collected.routes)} ({hidden} hidden)")
    log(f"  Pagination: {'on' if cfg.pagination else 'off'}")

    for route in collected.routes:
        log_verbose(f"    - /{route.slug} ({route.id})")

    if collected.skipped:
        log("Skipped files:", color="yellow", err=True)
        for path, reason in collected.skipped:
            log(f"- {path} ({reason})", color="yellow", err=True)

    if collected.warnings:
        log("Warnings:", color="yellow", err=True)
        for warning in collected.warnings:
            log(f"- {warning}", color="yellow", err=True)


def _starter_sidebar(tree: Dir) -> list[dict[str, Any]]:
    """Top-level sidebar items that reproduce the auto sidebar order."""
    items: list[dict[str, Any]] = []
    for name, node in sort_dir_entries(tree.items()):
        if isinstance(node, Dir):
            items.append({"label": name, "autogenerate": {"directory": name}})
        else:
            items.append(
                {
                    "label": node.sidebar.label or node.title,
                    "link": ensure_leading_and_trailing_slashes(node.slug),
                }
            )
    return items


@app.command()
def init(
    config: ConfigOption = Path("docnav.yml"),
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite existing sidebar config"),
    ] = False,
    quiet: QuietOption = False,
    verbose: VerboseOption = False,
) -> None:
    """Write a starter sidebar config based on the docs directory."""
    log, log_verbose = _make_logger(quiet, verbose)

    if not config.exists():
        log(f"Error: Config file not found: {config}", color="red", err=True)
        log(
            "Create one first or specify path with --config.",
            color="yellow",
            err=True,
        )
        raise typer.Exit(1)

    _, collected = _load_site(config, log)

    yaml_rt = YAML()
    yaml_rt.preserve_quotes = True
    with open(config, encoding="utf-8") as f:
        data = yaml_rt.load(f)

    owner = sidebar_target(data)
    if owner is None:
        log(
            f"Error: '{PLUGIN_NAME}' plugin options must be a mapping.",
            color="red",
            err=True,
        )
        raise typer.Exit(1)

    if "sidebar" in owner and not force:
        log("Error: sidebar already configured.", color="red", err=True)
        log(
            "Use --force to overwrite existing configuration.",
            color="yellow",
            err=True,
        )
        raise typer.Exit(1)

    items = _starter_sidebar(treeify(collected.routes))
    owner["sidebar"] = items

    with open(config, "w", encoding="utf-8") as f:
        yaml_rt.dump(data, f)

    log(f"Added sidebar with {len(items)} items to {config}", color="green")
    for item in items:
        target = item.get("link") or f"{item['autogenerate']['directory']}/*"
        log_verbose(f"  - {item['label']}: {target}")


if __name__ == "__main__":
    app()
