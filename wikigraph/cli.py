"""CLI entrypoint for wikigraph."""

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .config import SiteConfig, detect_content_dir, find_config, load_config
from .models import EDGE_TYPES


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(__version__, prog_name="wikigraph")
@click.option(
    "--content",
    "-c",
    type=click.Path(exists=False, file_okay=False, dir_okay=True, path_type=Path),
    default=None,
    help="Path to the content pages directory (defaults to config or auto-detected src/content/pages)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to wikigraph.toml (defaults to the nearest one above the current directory)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, content: Path | None, config_path: Path | None, verbose: bool) -> None:
    """wikigraph - Relation graph engine for a personal wiki.

    Builds the RCC-8 relation graph, breadcrumbs, backlinks, and graph views
    from a directory of content pages.
    """
    _configure_logging(verbose)
    ctx.ensure_object(dict)

    config_path = config_path or find_config(Path.cwd())
    try:
        config = load_config(config_path) if config_path else SiteConfig()
    except ValueError as e:
        raise click.ClickException(f"Invalid config {config_path}: {e}")

    if content is None:
        content = config.content_dir or detect_content_dir(Path.cwd())
        if content is None:
            raise click.ClickException(
                "Content directory not found. Pass --content /path/to/pages or run from inside the site."
            )

    if not content.exists() or not content.is_dir():
        raise click.BadParameter(f"Directory '{content}' does not exist.", param_hint="--content / -c")

    ctx.obj["content"] = content.resolve()
    ctx.obj["config"] = config


def _out_dir(ctx: click.Context, out_dir: Path | None) -> Path:
    config: SiteConfig = ctx.obj["config"]
    return out_dir or config.out_dir or Path("dist")


@cli.command()
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["json", "md", "rich"]),
    default="json",
    help="json: full node/edge data; md/rich: summary",
)
@click.option("--out", type=click.Path(dir_okay=False, path_type=Path), help="Output file path (default: stdout)")
@click.option("--top", type=int, default=15, show_default=True, help="Rows in the most-connected table")
@click.pass_context
def graph(ctx: click.Context, fmt: str, out: Path | None, top: int) -> None:
    """Output the full relation graph view."""
    from .commands.graph_cmd import run_graph

    config: SiteConfig = ctx.obj["config"]
    exit_code = run_graph(ctx.obj["content"], extensions=config.extensions, fmt=fmt, out=out, top=top)
    sys.exit(exit_code)


@cli.command()
@click.argument("root")
@click.option(
    "--type",
    "relation_types",
    type=click.Choice(list(EDGE_TYPES)),
    multiple=True,
    help="Relation kind to follow (repeatable; default from config)",
)
@click.option("--depth", type=click.IntRange(min=0), default=None, help="Maximum hops from ROOT")
@click.option("--format", "fmt", type=click.Choice(["json", "rich"]), default="json", help="Output format")
@click.option("--out", type=click.Path(dir_okay=False, path_type=Path), help="Output file path (default: stdout)")
@click.pass_context
def subgraph(
    ctx: click.Context,
    root: str,
    relation_types: tuple[str, ...],
    depth: int | None,
    fmt: str,
    out: Path | None,
) -> None:
    """Output the subgraph within DEPTH hops of ROOT.

    Examples:

        wikigraph subgraph guides --type ntpp --type tpp --depth 2

        wikigraph subgraph index --format rich
    """
    from .commands.graph_cmd import run_subgraph

    config: SiteConfig = ctx.obj["config"]
    exit_code = run_subgraph(
        ctx.obj["content"],
        root,
        relation_types=relation_types or config.graph.relation_types,
        depth=config.graph.depth if depth is None else depth,
        extensions=config.extensions,
        fmt=fmt,
        out=out,
    )
    sys.exit(exit_code)


@cli.command()
@click.argument("slug")
@click.option("--json", "output_json", is_flag=True, help="Output results as JSON")
@click.pass_context
def breadcrumbs(ctx: click.Context, slug: str, output_json: bool) -> None:
    """Show the breadcrumb trail from the root down to SLUG."""
    from .commands.graph_cmd import run_breadcrumbs

    config: SiteConfig = ctx.obj["config"]
    sys.exit(run_breadcrumbs(ctx.obj["content"], slug, extensions=config.extensions, output_json=output_json))


@cli.command()
@click.argument("slug")
@click.option("--json", "output_json", is_flag=True, help="Output results as JSON")
@click.pass_context
def relations(ctx: click.Context, slug: str, output_json: bool) -> None:
    """Show declared and inferred relations of SLUG."""
    from .commands.graph_cmd import run_relations

    config: SiteConfig = ctx.obj["config"]
    sys.exit(run_relations(ctx.obj["content"], slug, extensions=config.extensions, output_json=output_json))


@cli.command()
@click.option("--out", type=click.Path(dir_okay=False, path_type=Path), help="Output file path (default: stdout)")
@click.pass_context
def backlinks(ctx: click.Context, out: Path | None) -> None:
    """Output the backlinks map as JSON."""
    from .commands.export_cmd import run_backlinks

    config: SiteConfig = ctx.obj["config"]
    sys.exit(run_backlinks(ctx.obj["content"], out=out, extensions=config.extensions))


@cli.command("index")
@click.option("--out", type=click.Path(dir_okay=False, path_type=Path), help="Output file path (default: stdout)")
@click.pass_context
def popup_index(ctx: click.Context, out: Path | None) -> None:
    """Output the popup index (path -> title, description) as JSON."""
    from .commands.export_cmd import run_index

    config: SiteConfig = ctx.obj["config"]
    sys.exit(run_index(ctx.obj["content"], out=out, extensions=config.extensions))


@cli.command()
@click.option(
    "--out-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for the JSON artifacts (default: config out_dir or ./dist)",
)
@click.pass_context
def export(ctx: click.Context, out_dir: Path | None) -> None:
    """Write popup-index, backlinks, graph, and relations JSON files."""
    from .commands.export_cmd import run_export

    config: SiteConfig = ctx.obj["config"]
    sys.exit(run_export(ctx.obj["content"], _out_dir(ctx, out_dir), extensions=config.extensions))


@cli.command()
@click.option(
    "--out-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for the JSON artifacts (default: config out_dir or ./dist)",
)
@click.pass_context
def watch(ctx: click.Context, out_dir: Path | None) -> None:
    """Re-export artifacts whenever content pages change.

    Runs until interrupted (Ctrl+C).
    """
    from .commands.watch_cmd import run_watch

    config: SiteConfig = ctx.obj["config"]
    sys.exit(run_watch(ctx.obj["content"], _out_dir(ctx, out_dir), extensions=config.extensions))


def main() -> None:
    """Main entrypoint."""
    cli()


if __name__ == "__main__":
    main()
