"""CLI entry point using Typer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer

if TYPE_CHECKING:
    from tileforge.config import AppConfig
    from tileforge.models.tileset import Tileset

app = typer.Typer(
    name="tileforge",
    help="Inspect Tiled tilesets and resolve animated tiles.",
    no_args_is_help=True,
)


def _config() -> AppConfig:
    """Load settings, exiting with status 1 on invalid values."""
    from pydantic import ValidationError

    from tileforge.config import load_config

    try:
        return load_config()
    except ValidationError as e:
        typer.echo(f"Error: invalid configuration: {e}", err=True)
        raise typer.Exit(1) from None


def _load(path: Path) -> tuple[Tileset, Path]:
    """Load *path* through the library, exiting with status 1 on failure."""
    from tileforge.library import TilesetLibrary
    from tileforge.loader import TilesetLoadError

    config = _config()
    library = TilesetLibrary(config.assets_dir)
    try:
        tileset = library.get(path)
    except TilesetLoadError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None
    return tileset, library.path_for(path)


@app.command()
def info(
    path: Annotated[Path, typer.Argument(help="Tileset file (.tsx or .tsj)")],
) -> None:
    """Show tileset geometry and its animations."""
    tileset, _ = _load(path)

    typer.echo(f"Tileset: {tileset.name}")
    typer.echo(
        f"Grid: {tileset.columns} x {tileset.rows} tiles of "
        f"{tileset.tile_width}x{tileset.tile_height} px ({tileset.tile_count} tiles)"
    )
    typer.echo(f"Image: {tileset.image.source} ({tileset.image.width}x{tileset.image.height})")
    typer.echo(f"Animations: {len(tileset.animations)}")
    for base in sorted(tileset.animations):
        clip = tileset.animations[base]
        frames = " -> ".join(str(tile_id) for tile_id in clip.tile_ids)
        typer.echo(f"  {base}: {frames} ({clip.cycle_length} ms)")


@app.command()
def resolve(
    path: Annotated[Path, typer.Argument(help="Tileset file (.tsx or .tsj)")],
    tile: Annotated[int, typer.Argument(help="Base tile index")],
    at: Annotated[int, typer.Option("--at", "-t", help="Elapsed milliseconds")] = 0,
) -> None:
    """Print the tile index drawn for TILE at the given time."""
    from tileforge.resolver import resolve as resolve_tile

    tileset, _ = _load(path)
    if not 0 <= tile < tileset.tile_count:
        typer.echo(f"Error: tile {tile} is outside 0..{tileset.tile_count - 1}", err=True)
        raise typer.Exit(1)
    typer.echo(str(resolve_tile(tileset, tile, at)))


@app.command()
def timeline(
    path: Annotated[Path, typer.Argument(help="Tileset file (.tsx or .tsj)")],
    tile: Annotated[int, typer.Argument(help="Base tile index")],
    step: Annotated[
        int | None,
        typer.Option("--step", "-s", min=1, help="Sampling interval in milliseconds"),
    ] = None,
    duration: Annotated[
        int | None,
        typer.Option("--duration", "-d", min=1, help="Total time to sample in milliseconds"),
    ] = None,
) -> None:
    """Sample which tile TILE shows over time."""
    from tileforge.resolver import resolve as resolve_tile

    config = _config()
    step = step or config.timeline.step_ms
    duration = duration or config.timeline.duration_ms

    tileset, _ = _load(path)
    if not 0 <= tile < tileset.tile_count:
        typer.echo(f"Error: tile {tile} is outside 0..{tileset.tile_count - 1}", err=True)
        raise typer.Exit(1)

    clip = tileset.clip_for(tile)
    if clip is None:
        typer.echo(f"Tile {tile} is static")
    else:
        typer.echo(f"Tile {tile}: {len(clip.frames)} frames, cycle {clip.cycle_length} ms")
    for elapsed in range(0, duration + 1, step):
        typer.echo(f"{elapsed:>8} ms  {resolve_tile(tileset, tile, elapsed)}")


@app.command()
def check(
    path: Annotated[Path, typer.Argument(help="Tileset file (.tsx or .tsj)")],
) -> None:
    """Validate a tileset and its sprite sheet."""
    from tileforge.sheet import verify_sheet

    tileset, resolved = _load(path)
    typer.echo(f"  ✓ Tileset loaded ({tileset.name})")

    report = verify_sheet(tileset, resolved.parent)
    for item in report.checks:
        symbol = "✓" if item.passed else "✗"
        typer.echo(f"  {symbol} {item.label}")
        if not item.passed and item.message:
            typer.echo(f"    {item.message}")
    if not report.valid:
        raise typer.Exit(1)


def _configure_logging(config: AppConfig, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, config.log_level.upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


@app.callback(invoke_without_command=True)
def main(
    version: Annotated[
        bool, typer.Option("--version", "-v", help="Show version")
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", help="Enable debug logging")
    ] = False,
) -> None:
    """tileforge - Tiled tileset loading and tile animation resolution."""
    if version:
        from tileforge import __version__

        typer.echo(f"tileforge {__version__}")
        raise typer.Exit()

    _configure_logging(_config(), verbose)
