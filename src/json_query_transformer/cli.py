"""Command-line interface for the JSON Query Transformer."""

import logging
import traceback
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import click

from . import __version__
from .config import ServiceConfig
from .engines import create_engine
from .error_handler import ErrorHandler
from .transformer import QueryTransformer
from .types import FileProcessingError
from .utils.log_setup import setup_logging

# Exit codes following Unix conventions
EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_USAGE_ERROR = 2

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CliConfiguration:
    """Validated command-line options."""
    input_file: Path
    query_file: Path
    output_file: Optional[Path] = None
    pretty_print: bool = False
    verbose: bool = False
    debug: bool = False

    def __post_init__(self):
        if self.input_file is None:
            raise ValueError("Input file path cannot be None")
        if self.query_file is None:
            raise ValueError("Query file path cannot be None")


def _report_error(context: str, error: BaseException, debug: bool) -> None:
    click.echo(f"{context}: {error}", err=True)
    if debug:
        click.echo("\nDebug information:", err=True)
        click.echo("".join(traceback.format_exception(type(error), error, error.__traceback__)), err=True)


def run(config: CliConfiguration, transformer: QueryTransformer) -> int:
    """
    Execute a transformation for validated CLI options.

    Args:
        config: Parsed command-line options
        transformer: Transformer to run

    Returns:
        Process exit code
    """
    error_handler = ErrorHandler(logger)
    try:
        error_handler.require_readable_file(config.input_file, "Input file")
        error_handler.require_readable_file(config.query_file, "Query file")
    except FileProcessingError as e:
        _report_error("File processing error", e, config.debug)
        return EXIT_USAGE_ERROR

    logger.info(f"Starting transformation: input={config.input_file}, query={config.query_file}, "
                f"output={config.output_file or 'stdout'}")

    result = transformer.transform_files(config.input_file, config.query_file)

    if not result.success:
        click.echo(f"Transformation failed: {result.error_message}", err=True)
        if config.debug and result.cause is not None:
            click.echo("\nDebug information:", err=True)
            click.echo("".join(traceback.format_exception(
                type(result.cause), result.cause, result.cause.__traceback__)), err=True)
        return EXIT_FAILURE

    try:
        if config.output_file is not None:
            transformer.write_json(result.value, config.output_file, config.pretty_print)
            click.echo(f"Transformation completed successfully. Output written to: {config.output_file}")
        else:
            click.echo(transformer.format_json(result.value, config.pretty_print))
    except (FileProcessingError, TypeError, ValueError) as e:
        _report_error("Output error", e, config.debug)
        return EXIT_FAILURE

    if config.verbose:
        click.echo(f"Processing completed in {result.processing_time_ms}ms", err=True)

    logger.info(f"Transformation completed successfully in {result.processing_time_ms}ms")
    return EXIT_SUCCESS


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__)
@click.argument('input_file', type=click.Path(path_type=Path))
@click.argument('query_file', type=click.Path(path_type=Path))
@click.option('--output', '-o', type=click.Path(dir_okay=False, path_type=Path),
              help='Output file path (default: stdout)')
@click.option('--pretty', '-p', is_flag=True, help='Pretty-print the output JSON with indentation')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging and timing output')
@click.option('--debug', '-d', is_flag=True, help='Print stack traces on failure')
@click.pass_context
def main(ctx: click.Context, input_file: Path, query_file: Path, output: Optional[Path],
         pretty: bool, verbose: bool, debug: bool):
    """Transform JSON data in INPUT_FILE using the query in QUERY_FILE."""
    if debug:
        setup_logging(logging.DEBUG)
    elif verbose:
        setup_logging(logging.INFO)
    else:
        setup_logging(logging.WARNING)

    config = CliConfiguration(
        input_file=input_file,
        query_file=query_file,
        output_file=output,
        pretty_print=pretty,
        verbose=verbose,
        debug=debug
    )

    try:
        service_config = ServiceConfig.from_env()
        transformer = QueryTransformer(engine=create_engine(service_config.engine))
    except ValueError as e:
        _report_error("Configuration error", e, debug)
        ctx.exit(EXIT_USAGE_ERROR)

    ctx.exit(run(config, transformer))


if __name__ == '__main__':
    main()
