# flake8: noqa: B008

import logging
from pathlib import Path

import typer

from colorviz.__about__ import __application__
from colorviz.app import PolyscopeApp
from colorviz.builders import build_topology
from colorviz.color import ColorModel, ColorSpace
from colorviz.config import Dimensionality, FaceSlicing, VisualizationSettings, load_settings

app = typer.Typer(context_settings={"help_option_names": ["-h", "--help"]})


def configure_logging(log_level: str):
    # Map text log level to numeric
    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        raise typer.BadParameter(f"Invalid log level: {log_level}")

    # By default, root logger follows the chosen level
    root_level = numeric_level

    # Special case: if DEBUG is chosen, don't expose 3rd-party debug
    if numeric_level == logging.DEBUG:
        root_level = logging.INFO

    # Configure root logger
    logging.basicConfig(level=root_level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    # Configure application logger separately
    logging.getLogger(__application__).setLevel(numeric_level)


def apply_overrides(
    settings: VisualizationSettings,
    dimensionality: Dimensionality | None = None,
    model: ColorModel | None = None,
    space: ColorSpace | None = None,
    slicing: FaceSlicing | None = None,
) -> VisualizationSettings:
    """Apply command line choices on top of the loaded settings."""
    if dimensionality is not None:
        settings.topology.dimensionality = dimensionality
    if model is not None:
        # the category follows the model so the pair stays consistent
        settings.color.category = model.category
        settings.color.model = model
    if space is not None:
        settings.color.space = space
    if slicing is not None:
        settings.topology.face_slicing = slicing
    return settings


@app.command()
def _(
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a TOML settings file",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    dimensionality: Dimensionality | None = typer.Option(
        None,
        "--dimensionality",
        "-d",
        case_sensitive=False,
        help="Shape to build: vertex, edge, face or volume",
    ),
    model: ColorModel | None = typer.Option(
        None,
        "--model",
        "-m",
        case_sensitive=False,
        help="Color model the channels are sampled in",
    ),
    space: ColorSpace | None = typer.Option(
        None,
        "--space",
        case_sensitive=False,
        help="Color space the position model is embedded in",
    ),
    slicing: FaceSlicing | None = typer.Option(
        None,
        "--slicing",
        case_sensitive=False,
        help="Slicing axis: edges step along it, faces hold it constant",
    ),
    no_gui: bool = typer.Option(
        False,
        "--no-gui",
        help="Build the topology and log a summary without opening a window",
    ),
    log_level: str = typer.Option(
        "INFO",
        "--log-level",
        help="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    ),
) -> None:
    # Configure logging based on the provided log_level
    configure_logging(log_level)

    try:
        settings = load_settings(config_path) if config_path else VisualizationSettings()
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--config") from e

    settings = apply_overrides(settings, dimensionality=dimensionality, model=model, space=space, slicing=slicing)

    if no_gui:
        build_topology(settings)
        return

    PolyscopeApp(settings=settings).run()


def main():
    app()


if __name__ == "__main__":
    main()
