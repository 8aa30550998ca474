"""CLI interface."""
from __future__ import annotations

import importlib
import importlib.util
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer

from svganimation.engine import AnimatedObject, AnimationEngine, ManualFrameScheduler
from svganimation.errors import ConfigurationError, RuntimeEvaluationError
from svganimation.managers import ConfigManager
from svganimation.models.enums import EngineStatus, LogCategory, LogLevel
from svganimation.scene import SvgDocument
from svganimation.utils.logger import configure_logger, get_logger

log = get_logger().for_category(LogCategory.SYSTEM)

app = typer.Typer(add_completion=False, help="Equation-driven SVG animation")


def load_descriptors(reference: str) -> Dict[str, Any]:
    """
    Resolve 'module:attribute' (or 'path/to/file.py:attribute') to a
    {element_id: descriptor} mapping. A callable attribute is called first.
    """
    module_ref, sep, attribute = reference.partition(":")
    if not sep or not module_ref or not attribute:
        raise typer.BadParameter(f"Expected 'module:attribute', got {reference!r}")

    if module_ref.endswith(".py"):
        path = Path(module_ref)
        spec = importlib.util.spec_from_file_location(path.stem, path)
        if spec is None or spec.loader is None:
            raise typer.BadParameter(f"Cannot load descriptors from {path}")
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
    else:
        module = importlib.import_module(module_ref)

    try:
        descriptors = getattr(module, attribute)
    except AttributeError:
        raise typer.BadParameter(f"{module_ref} has no attribute {attribute!r}") from None

    if callable(descriptors):
        descriptors = descriptors()
    if not isinstance(descriptors, dict):
        raise typer.BadParameter(f"{reference} must give a dict of element id -> descriptor")
    return descriptors


def build_objects(document: SvgDocument, descriptors: Dict[str, Any]) -> List[AnimatedObject]:
    objects = []
    for element_id, descriptor in descriptors.items():
        try:
            node = document.require_node(element_id)
        except KeyError:
            raise typer.BadParameter(f"No element with id {element_id!r} in the SVG") from None
        objects.append(AnimatedObject(node, descriptor))
    return objects


@app.command()
def render(
    svg: Path = typer.Argument(..., exists=True, dir_okay=False, help="Source SVG document."),
    descriptors: str = typer.Argument(..., help="'module:attribute' giving {element_id: descriptor}."),
    out: Path = typer.Option(Path("frames"), "--out", "-o", help="Directory for the rendered frames."),
    fps: Optional[float] = typer.Option(None, "--fps", help="Frames per second (default: from settings)."),
    duration: float = typer.Option(5.0, "--duration", "-d", min=0.0, help="Seconds to render."),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML config file."),
    interface: Optional[bool] = typer.Option(None, "--interface/--no-interface", help="Draw the control panel."),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Render an animation offline, one SVG file per frame."""
    configure_logger(LogLevel.DEBUG if verbose else LogLevel.INFO)

    settings = ConfigManager(config).load()
    overrides: Dict[str, Any] = {}
    if fps is not None:
        overrides["fps"] = fps
    if interface is not None:
        overrides["show_interface"] = interface
    if overrides:
        settings = settings.model_copy(update=overrides)

    document = SvgDocument.from_file(svg)
    objects = build_objects(document, load_descriptors(descriptors))

    scheduler = ManualFrameScheduler(frame_interval=1.0 / settings.fps)
    engine = AnimationEngine(settings, scheduler=scheduler)

    try:
        engine.init(objects)
    except ConfigurationError as ex:
        typer.echo(f"Configuration error [{ex.code}]: {ex.message}", err=True)
        raise typer.Exit(code=2)

    out.mkdir(parents=True, exist_ok=True)
    total = int(round(duration * settings.fps))

    engine.play()
    document.write(out / "frame_00000.svg")
    written = 1

    try:
        for index in range(1, total + 1):
            scheduler.step()
            document.write(out / f"frame_{index:05d}.svg")
            written += 1
            if engine.status is EngineStatus.ENDED and not scheduler.running:
                break
    except RuntimeEvaluationError as ex:
        typer.echo(f"Animation failed at t={ex.time:.3f}s [{ex.code}]: {ex.message}", err=True)
        raise typer.Exit(code=1)

    log.info("Render complete", frames=written, out=str(out), status=engine.status.name)
    typer.echo(json.dumps({"frames": written, "out": str(out), "status": engine.status.name}, indent=2))


@app.command()
def settings(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML config file."),
):
    """Print the resolved engine settings."""
    configure_logger(LogLevel.WARN)
    resolved = ConfigManager(config).load()
    typer.echo(json.dumps(resolved.to_dict(), indent=2))


def main():
    app()


if __name__ == "__main__":
    main()
