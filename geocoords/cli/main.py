"""Main Typer CLI application for coordinate tools."""

import logging

import typer

app = typer.Typer(
    help="Coordinate tools: format, parse and measure between WGS84 points",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Configure logging for all commands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _register_commands() -> None:
    """
    Import command modules to register commands with the app.

    Commands use the @app.command() decorator and register themselves when
    the module is imported.
    """
    from geocoords.cli import commands

    # Avoid "imported but unused" warnings by explicitly using the module
    _ = commands


_register_commands()


if __name__ == "__main__":
    app()
