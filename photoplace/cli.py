"""Command-line interface for PhotoPlace.

Usage:
    photoplace plan --pitch 5 [options]
    photoplace hash --pitch 5 [options]
    photoplace sweep [options]
    photoplace export-size 4032 3024
    photoplace normalize model.glb [--import-scale 0.01]
    photoplace transform ground 1.5 -2.0 [--scale 2]
    photoplace transform check '{"position": ...}'
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .core.config import PhotoPlaceConfig
from .mesh.loader import MeshLoader
from .render.export import calculate_export_dimensions
from .render.export_hash import create_export_hash
from .render.plan import RenderPlanInput, create_render_plan
from .scene.transform import (
    ParseError,
    create_ground_placement,
    is_identity_rotation,
    parse_transform,
    serialize_transform,
)

console = Console()
logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging with rich output."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_time=False)],
    )


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option(
    "-c", "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Configuration JSON file",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, config_path: str | None) -> None:
    """PhotoPlace - Place 3D product models into photos."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    setup_logging(verbose)
    if config_path:
        ctx.obj["config"] = PhotoPlaceConfig.from_file(config_path)
        logger.debug("Loaded config from %s", config_path)
    else:
        ctx.obj["config"] = PhotoPlaceConfig.default()


def render_options(func):
    """Shared options describing a RenderPlanInput."""
    options = [
        click.option("--pitch", type=float, required=True, help="Camera pitch in degrees"),
        click.option("--fov", type=float, default=None, help="Field of view in degrees (default 50)"),
        click.option("--camera-z", type=float, default=None, help="Camera distance along Z (default from config)"),
        click.option("--shadow/--no-shadow", default=None, help="Contact shadow (default on)"),
        click.option("--occlusion/--no-occlusion", default=None, help="Occlusion masking (default off)"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _plan_input(
    cfg: PhotoPlaceConfig,
    pitch: float,
    fov: float | None,
    camera_z: float | None,
    shadow: bool | None,
    occlusion: bool | None,
) -> RenderPlanInput:
    return RenderPlanInput(
        fov=fov,
        pitch=pitch,
        camera_z=cfg.camera.camera_z if camera_z is None else camera_z,
        shadow_enabled=shadow,
        occlusion_enabled=occlusion,
    )


@main.command()
@render_options
@click.pass_context
def plan(
    ctx: click.Context,
    pitch: float,
    fov: float | None,
    camera_z: float | None,
    shadow: bool | None,
    occlusion: bool | None,
) -> None:
    """Print the render plan for the given camera settings as JSON."""
    plan_input = _plan_input(ctx.obj["config"], pitch, fov, camera_z, shadow, occlusion)
    click.echo(create_render_plan(plan_input).to_json())


@main.command("hash")
@render_options
@click.pass_context
def hash_cmd(
    ctx: click.Context,
    pitch: float,
    fov: float | None,
    camera_z: float | None,
    shadow: bool | None,
    occlusion: bool | None,
) -> None:
    """Print the export hash for the given camera settings."""
    plan_input = _plan_input(ctx.obj["config"], pitch, fov, camera_z, shadow, occlusion)
    click.echo(create_export_hash(plan_input))


@main.command()
@click.option("--fov", type=float, default=None, help="Field of view in degrees (default 50)")
@click.option("--shadow/--no-shadow", default=None, help="Contact shadow (default on)")
@click.option("--occlusion/--no-occlusion", default=None, help="Occlusion masking (default off)")
@click.pass_context
def sweep(
    ctx: click.Context,
    fov: float | None,
    shadow: bool | None,
    occlusion: bool | None,
) -> None:
    """Show plans and hashes across the pitch slider range."""
    cfg: PhotoPlaceConfig = ctx.obj["config"]

    table = Table(title="Pitch Sweep")
    table.add_column("Pitch", justify="right")
    table.add_column("FOV", justify="right")
    table.add_column("Camera Z", justify="right")
    table.add_column("Shadow")
    table.add_column("Occlusion")
    table.add_column("Hash", style="cyan")

    for pitch in cfg.camera.pitch_steps():
        plan_input = _plan_input(cfg, pitch, fov, None, shadow, occlusion)
        render_plan = create_render_plan(plan_input)
        camera = render_plan.camera_config
        compositing = render_plan.compositing_settings
        table.add_row(
            f"{camera.pitch:g}°",
            f"{camera.fov:g}",
            f"{camera.camera_z:g}",
            "yes" if compositing.shadow_enabled else "no",
            "yes" if compositing.occlusion_enabled else "no",
            create_export_hash(plan_input),
        )

    console.print(table)


@main.command()
@click.argument("model_path", type=click.Path(exists=True))
@click.option("--import-scale", type=float, default=1.0, show_default=True, help="Scale applied at import")
@click.option("-o", "--output", type=click.Path(), default=None, help="Write metadata JSON to file")
def normalize(model_path: str, import_scale: float, output: str | None) -> None:
    """Compute bottom-center pivot metadata for a 3D model."""
    try:
        loader = MeshLoader(model_path)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error: {e}[/bold red]")
        sys.exit(1)

    result = loader.normalization(import_scale)

    table = Table(title=f"Normalization: {loader.path.name}")
    table.add_column("Property", style="cyan")
    table.add_column("Value")
    table.add_row("Vertices", f"{loader.num_vertices:,}")
    table.add_row("Faces", f"{loader.num_faces:,}")
    table.add_row("Pivot offset", ", ".join(f"{v:.4f}" for v in result.pivot_offset))
    original = result.original_bounds
    scaled = result.normalized_bounds
    table.add_row("Original size", f"{original.width:.4f} x {original.height:.4f} x {original.depth:.4f}")
    table.add_row("Import scale", f"{result.import_scale:g}")
    table.add_row("Normalized size", f"{scaled.width:.4f} x {scaled.height:.4f} x {scaled.depth:.4f}")
    console.print(table)

    if output:
        path = Path(output)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(result.model_dump(mode="json"), f, indent=2)
        console.print(f"[green]Saved metadata to {path}[/green]")


@main.command("export-size")
@click.argument("width", type=click.IntRange(min=1))
@click.argument("height", type=click.IntRange(min=1))
@click.pass_context
def export_size(ctx: click.Context, width: int, height: int) -> None:
    """Show the composite size for a WIDTH x HEIGHT photo."""
    cfg: PhotoPlaceConfig = ctx.obj["config"]
    dims = calculate_export_dimensions(width, height, max_width=cfg.export.max_width)
    click.echo(f"{dims.width}x{dims.height} (scale {dims.scale:g}, {cfg.export.image_type})")


@main.group()
def transform() -> None:
    """Create and inspect placement transforms."""


@transform.command()
@click.argument("x", type=float)
@click.argument("z", type=float)
@click.option("--scale", type=float, default=1.0, show_default=True, help="Uniform scale")
def ground(x: float, z: float, scale: float) -> None:
    """Print a ground placement at (X, 0, Z) as JSON."""
    click.echo(serialize_transform(create_ground_placement(x, z, scale)))


@transform.command()
@click.argument("text")
def check(text: str) -> None:
    """Parse a serialized transform and report on it."""
    try:
        t = parse_transform(text)
    except ParseError as e:
        console.print(f"[bold red]Error: {e}[/bold red]")
        sys.exit(1)

    console.print(f"[cyan]Position:[/cyan] {t.position}")
    console.print(f"[cyan]Rotation:[/cyan] {t.rotation}")
    console.print(f"[cyan]Scale:[/cyan] {t.scale}")
    identity = is_identity_rotation(t.rotation)
    console.print(f"[cyan]Identity rotation:[/cyan] {'yes' if identity else 'no'}")


if __name__ == "__main__":
    main()
