from __future__ import annotations

import importlib.util
import pathlib
import sys
import traceback
from types import ModuleType
from typing import Callable, Sequence

import numpy as np
import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from railpath._config import PathSettings, get_path_settings
from railpath.geometry import BezierSegment, Path
from railpath.validation import ValidationError

console = Console()
app = typer.Typer(help="Inspect and query 3D line/Bezier paths defined in Python modules.")


def _load_module(path: pathlib.Path) -> ModuleType:
    module_name = "railpath_user_model"
    if module_name in sys.modules:
        del sys.modules[module_name]

    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise typer.BadParameter(f"Unable to import model at {path}")

    module = importlib.util.module_from_spec(spec)
    # Register module so features relying on sys.modules (e.g., dataclasses) work.
    sys.modules[module_name] = module
    spec.loader.exec_module(module)
    return module


class ModelBuildError(RuntimeError):
    """Raised when a model module cannot provide a usable path."""


def _format_exception(exc: BaseException) -> str:
    return "".join(traceback.format_exception(exc))


def _path_factory_from_module(model_path: pathlib.Path) -> Callable[[], Path]:
    def factory() -> Path:
        module = _load_module(model_path)
        builder = getattr(module, "build", None)
        if builder is None or not callable(builder):
            raise ModelBuildError(f"{model_path} must define a callable build() function.")
        result = builder()
        if not isinstance(result, Path):
            raise ModelBuildError(f"{model_path} build() must return a railpath Path, got {type(result).__name__}.")
        return result

    return factory


def _build_path(model: pathlib.Path) -> Path:
    if not model.exists():
        raise typer.BadParameter(f"Model path {model} does not exist.")
    try:
        return _path_factory_from_module(model)()
    except ModelBuildError as exc:
        raise typer.BadParameter(str(exc)) from exc
    except typer.BadParameter:
        raise
    except Exception as exc:
        console.print(Panel.fit(_format_exception(exc), title="Model build failed", style="red"))
        raise typer.BadParameter(f"Model execution failed: {exc}") from exc


def _fmt_vec(vec: Sequence[float] | np.ndarray) -> str:
    return "(" + ", ".join(f"{float(v):.4g}" for v in vec) + ")"


def _fmt_length(value: float, settings: PathSettings) -> str:
    return f"{value:.4f} {settings.unit_label}"


@app.command()
def info(
    model: pathlib.Path = typer.Argument(..., help="Python module whose build() returns a Path."),
) -> None:
    """
    Summarize the segments of a path and its cached lengths.
    """

    settings = get_path_settings()
    path = _build_path(model)

    table = Table(title=f"Segments of {model.name}")
    table.add_column("#", justify="right")
    table.add_column("Kind")
    table.add_column("Points", justify="right")
    table.add_column("Length", justify="right")
    table.add_column("Start")
    table.add_column("End")
    for index, segment in enumerate(path):
        kind = f"Bezier (degree {segment.degree})" if isinstance(segment, BezierSegment) else "Line"
        table.add_row(
            str(index),
            kind,
            str(segment.point_count),
            _fmt_length(segment.length, settings),
            _fmt_vec(segment.start),
            _fmt_vec(segment.end),
        )
    console.print(table)
    console.print(
        Panel(
            f"Exclusive length: {_fmt_length(path.exclusive_length, settings)}\n"
            f"Inclusive length: {_fmt_length(path.inclusive_length, settings)}",
            title="Path",
            border_style="green",
        )
    )


@app.command()
def sample(
    model: pathlib.Path = typer.Argument(..., help="Python module whose build() returns a Path."),
    count: int | None = typer.Option(None, "--count", "-n", min=1, help="Number of intervals to sample."),
) -> None:
    """
    Print positions and tangents at evenly spaced global parameters.
    """

    settings = get_path_settings()
    steps = count if count is not None else settings.sample_count
    path = _build_path(model)

    table = Table(title=f"{model.name}: {steps + 1} samples")
    table.add_column("t", justify="right")
    table.add_column("Position")
    table.add_column("Tangent")
    try:
        for i in range(steps + 1):
            t = i / steps
            table.add_row(f"{t:.4f}", _fmt_vec(path.position_at(t)), _fmt_vec(path.tangent_at(t)))
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc
    console.print(table)


@app.command()
def nearest(
    model: pathlib.Path = typer.Argument(..., help="Python module whose build() returns a Path."),
    x: float = typer.Argument(..., help="Query point X."),
    y: float = typer.Argument(..., help="Query point Y."),
    z: float = typer.Argument(..., help="Query point Z."),
    precision: float | None = typer.Option(
        None, "--precision", "-p", help="World units per refinement span on Bezier segments."
    ),
) -> None:
    """
    Find the point on the path nearest to (X, Y, Z).
    """

    settings = get_path_settings()
    bezier_precision = precision if precision is not None else settings.bezier_precision
    path = _build_path(model)
    if len(path) == 0:
        raise typer.BadParameter(f"{model} produced an empty path.")

    try:
        result = path.nearest((x, y, z), bezier_precision=bezier_precision)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    console.print(
        Panel(
            f"t: {result.t:.6f}\n"
            f"Point: {_fmt_vec(result.point)}\n"
            f"Tangent: {_fmt_vec(result.tangent)}\n"
            f"Distance: {_fmt_length(result.distance, settings)}\n"
            f"Segment: {result.segment_index}",
            title="Nearest point",
            border_style="green",
        )
    )


def main() -> None:
    app()


if __name__ == "__main__":
    main()
