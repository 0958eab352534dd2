"""CLI app entry point.

Provides the main Typer app with the global verbosity flag and registers
the system commands (evaluate, show, batch).
"""

import logging

import typer

from fuzzrule.cli.system_commands import batch, evaluate, show
from fuzzrule.logging import configure_logging, set_debug_mode

app = typer.Typer(
    name="fuzzrule",
    help="fuzzrule - evaluate fuzzy rule-set inference systems.",
    add_completion=False,
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug output",
    ),
) -> None:
    """fuzzrule CLI - fuzzy inference from YAML system definitions."""
    # Keep stdout clean for command output unless asked otherwise
    configure_logging(console_level=logging.DEBUG if verbose else logging.WARNING)
    set_debug_mode(verbose)


app.command("evaluate")(evaluate)
app.command("show")(show)
app.command("batch")(batch)


if __name__ == "__main__":
    app()
