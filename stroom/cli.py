"""
Command Line Interface for stroom.
"""
import importlib
from typing import Optional

import click

from .config import Config, load_config
from .core.log import configure_logging
from .core.pipeline import Pipeline
from .demos import DEMOS, run_demo


def _load_pipeline(path: str) -> Pipeline:
    """Dynamically loads a pipeline (or a factory returning one) from a module path."""
    try:
        module_path, object_name = path.split(":", 1)
    except ValueError:
        raise click.BadParameter(
            "Pipeline path must be in the format 'path.to.module:pipeline_variable'"
        )

    try:
        module = importlib.import_module(module_path)
    except ImportError as e:
        raise click.BadParameter(f"Could not import module '{module_path}': {e}")

    if not hasattr(module, object_name):
        raise click.BadParameter(
            f"Module '{module_path}' does not have a variable named '{object_name}'"
        )

    pipeline = getattr(module, object_name)
    if not isinstance(pipeline, Pipeline) and callable(pipeline):
        # Pipelines are single-use, so a factory is the usual thing to point at.
        pipeline = pipeline()
    if not isinstance(pipeline, Pipeline):
        raise click.BadParameter(
            f"Object '{object_name}' in '{module_path}' is not a stroom Pipeline "
            f"or a factory returning one."
        )

    return pipeline


_LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


def _configure_logging(config: Config, verbose: bool):
    """Configures logging for the CLI application from the loaded config."""
    level = "debug" if verbose else str(config.get("logging.level", "warning")).lower()
    if level not in _LOG_LEVELS:
        raise click.BadParameter(
            f"'{level}' is not one of {', '.join(_LOG_LEVELS)}",
            param_hint="'logging.level'",
        )
    configure_logging(level, config.get("logging.renderer", "json"), force=True)


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to a YAML configuration file.",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log pipeline events at debug level.")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[str], verbose: bool):
    """stroom command-line interface."""
    config = load_config(config_path)
    _configure_logging(config, verbose)
    ctx.obj = config


@cli.command()
def demos():
    """List the available demo pipelines."""
    width = max(len(name) for name in DEMOS)
    for name, demo in DEMOS.items():
        click.echo(f"{name.ljust(width)}  {demo.description}")


@cli.command()
@click.argument("name", type=click.Choice(list(DEMOS)))
@click.option("--limit", type=click.IntRange(min=0), default=None, help="Stop after this many elements.")
@click.pass_obj
def demo(config: Config, name: str, limit: Optional[int]):
    """
    Run a demo pipeline and print its output.

    NAME is one of the names listed by `stroom demos`.
    """
    try:
        run_demo(name, click.echo, config=config, limit=limit)
    except ValueError as e:
        raise click.ClickException(str(e))


@cli.command()
@click.argument("pipeline_path", type=str)
@click.option(
    "--output-file",
    "output_file",
    type=click.File("w"),
    default="-",
    help="Path to a file to write output to (writes to stdout by default).",
)
def run(pipeline_path: str, output_file):
    """
    Run a stroom pipeline, writing one line per element.

    PIPELINE_PATH is the path to a pipeline object or a zero-argument factory,
    e.g., 'my_project.pipelines:make_pipeline'.
    """
    try:
        pipeline = _load_pipeline(pipeline_path)
    except click.BadParameter as e:
        raise click.ClickException(str(e))

    pipeline.for_each(lambda item: output_file.write(str(item) + "\n"))


if __name__ == "__main__":
    cli()
