"""
Fuzzy system commands for the fuzzrule CLI.

This module contains the commands operating on a YAML system definition:
- evaluate: Compute the decision for one set of inputs
- show: Display universes, sets, operators and rules
- batch: Evaluate every row of a CSV file
"""

import json
import math
import sys
from pathlib import Path
from typing import Optional

import pandas as pd
import typer
from rich.console import Console
from rich.table import Table

from fuzzrule.errors import ErrorCodes, ValidationError
from fuzzrule.fuzzy.batch import BatchInferenceRunner
from fuzzrule.fuzzy.config import FuzzySystemConfigLoader
from fuzzrule.fuzzy.system import build_machine
from fuzzrule.logging import get_logger

# Setup logging and console
logger = get_logger(__name__)
console = Console()
error_console = Console(stderr=True)

# Rows shown when a batch result is printed instead of saved
_PREVIEW_ROWS = 20


def parse_inputs(raw_inputs: list[str]) -> dict[str, float]:
    """
    Parse ``NAME=VALUE`` pairs given on the command line.

    Raises:
        ValidationError: If a pair is malformed or its value is not a number
    """
    inputs: dict[str, float] = {}
    for raw in raw_inputs:
        name, separator, value = raw.partition("=")
        name = name.strip()
        if not separator or not name:
            raise ValidationError(
                message=f"Invalid input '{raw}', expected NAME=VALUE",
                error_code=ErrorCodes.VALIDATION_INVALID_INPUT,
                details={"provided": raw},
            )
        try:
            inputs[name] = float(value)
        except ValueError as e:
            raise ValidationError(
                message=f"Invalid value for input '{name}': {value!r} is not a number",
                error_code=ErrorCodes.VALIDATION_INVALID_INPUT,
                details={"input": name, "value": value},
            ) from e
    return inputs


def _require_file(path: str, kind: str) -> Path:
    file_path = Path(path)
    if not file_path.exists():
        raise ValidationError(
            message=f"{kind} file not found: {path}",
            error_code=ErrorCodes.VALIDATION_FILE_NOT_FOUND,
            details={"file": path},
        )
    return file_path


def _json_number(value: float) -> Optional[float]:
    return None if math.isnan(value) else value


def _format_cell(value) -> str:
    if pd.isna(value):
        return "N/A"
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


def evaluate(
    config_file: str = typer.Argument(..., help="Path to the YAML system definition"),
    inputs: Optional[list[str]] = typer.Option(
        None, "--input", "-i", help="Input value as NAME=VALUE (repeatable)"
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Output in JSON format for scripting"
    ),
):
    """
    Compute the decision of a fuzzy system for the given inputs.

    Examples:
        fuzzrule evaluate fan.yaml --input temperature=31.5
        fuzzrule evaluate fan.yaml -i temperature=12 -i humidity=80 --json
    """
    try:
        config_path = _require_file(config_file, "System definition")
        values = parse_inputs(inputs or [])

        config = FuzzySystemConfigLoader().load_from_yaml(config_path)
        machine = build_machine(config)

        for name, value in values.items():
            if name not in machine.context:
                error_console.print(
                    f"[yellow]Warning:[/yellow] '{name}' is not an input of this system, ignored"
                )
            machine.context[name] = value
        decision = machine.evaluate()

        if json_output:
            result = {
                "inputs": {
                    name: _json_number(value)
                    for name, value in machine.context.values().items()
                },
                "output": config.output,
                "decision": _json_number(decision),
                "has_decision": machine.has_decision,
            }
            print(json.dumps(result, indent=2))
        elif machine.has_decision:
            console.print(
                f"[bold]{config.output}[/bold] = [green]{decision:.6g}[/green]"
            )
        else:
            console.print(
                f"[yellow]No decision[/yellow]: no rule fired for inputs "
                f"{machine.context.values()}"
            )

    except ValidationError as e:
        error_console.print(f"[bold red]Validation error:[/bold red] {str(e)}")
        sys.exit(1)
    except Exception as e:
        error_console.print(f"[bold red]Error:[/bold red] {str(e)}")
        logger.debug(f"Evaluate failed: {str(e)}", exc_info=True)
        sys.exit(1)


def show(
    config_file: str = typer.Argument(..., help="Path to the YAML system definition"),
):
    """
    Display the universes, fuzzy sets, operators and rules of a system.

    Examples:
        fuzzrule show fan.yaml
    """
    try:
        config_path = _require_file(config_file, "System definition")
        config = FuzzySystemConfigLoader().load_from_yaml(config_path)
        machine = build_machine(config)

        console.print(f"\n[bold]Fuzzy system[/bold] {config_path.name}")
        console.print(
            f"Operators: set={config.operators.set_operators} | "
            f"logic={config.operators.logic} | "
            f"defuzzifier={config.operators.defuzzifier}"
        )

        universe_table = Table(title="Universes")
        universe_table.add_column("Universe", style="cyan")
        universe_table.add_column("Role", style="magenta")
        universe_table.add_column("Points", justify="right")
        universe_table.add_column("Range", style="blue")
        universe_table.add_column("Sets", style="green")

        input_universes = {}
        for input_name, universe_name in config.inputs.items():
            input_universes.setdefault(universe_name, []).append(input_name)

        for universe in machine.universal_sets:
            roles = [f"input {name}" for name in input_universes.get(universe.name, [])]
            if universe.name == config.output:
                roles.append("output")
            universe_table.add_row(
                universe.name,
                ", ".join(roles) or "-",
                str(len(universe)),
                f"[{universe.domain[0]:g}, {universe.domain[-1]:g}]",
                ", ".join(universe.set_names) or "-",
            )
        console.print(universe_table)

        set_table = Table(title="Fuzzy sets")
        set_table.add_column("Universe", style="cyan")
        set_table.add_column("Set", style="green")
        set_table.add_column("Membership function")
        set_table.add_column("Support", style="blue")

        for universe in machine.universal_sets:
            for fuzzy_set in universe.sets:
                support = fuzzy_set.support()
                support_text = f"[{support[0]:g}, {support[-1]:g}]" if support else "empty"
                set_table.add_row(
                    universe.name,
                    fuzzy_set.name,
                    repr(fuzzy_set.membership_function),
                    support_text,
                )
        console.print(set_table)

        rule_table = Table(title="Rules")
        rule_table.add_column("#", justify="right")
        rule_table.add_column("Rule")
        for index, rule in enumerate(machine.rule_set, start=1):
            rule_table.add_row(str(index), rule.to_text())
        console.print(rule_table)

    except ValidationError as e:
        error_console.print(f"[bold red]Validation error:[/bold red] {str(e)}")
        sys.exit(1)
    except Exception as e:
        error_console.print(f"[bold red]Error:[/bold red] {str(e)}")
        logger.debug(f"Show failed: {str(e)}", exc_info=True)
        sys.exit(1)


def batch(
    config_file: str = typer.Argument(..., help="Path to the YAML system definition"),
    input_file: str = typer.Argument(..., help="CSV file with one column per input"),
    output_file: Optional[str] = typer.Option(
        None, "--output", "-o", help="Save results to a CSV file"
    ),
):
    """
    Evaluate every row of a CSV file and add a decision column.

    Examples:
        fuzzrule batch fan.yaml readings.csv
        fuzzrule batch fan.yaml readings.csv --output decisions.csv
    """
    try:
        config_path = _require_file(config_file, "System definition")
        input_path = _require_file(input_file, "Input")

        config = FuzzySystemConfigLoader().load_from_yaml(config_path)
        machine = build_machine(config)

        frame = pd.read_csv(input_path)
        decisions = BatchInferenceRunner(machine).run(frame)
        result = frame.copy()
        result[config.output] = decisions

        if output_file:
            result.to_csv(output_file, index=False)
            console.print(f"Results saved to {output_file} ({len(result)} rows)")
            return

        table = Table(title=f"Decisions for {input_path.name}")
        for column in result.columns:
            style = "green" if column == config.output else None
            table.add_column(str(column), style=style, justify="right")

        for row in result.head(_PREVIEW_ROWS).itertuples(index=False, name=None):
            table.add_row(*[_format_cell(value) for value in row])

        console.print(table)
        if len(result) > _PREVIEW_ROWS:
            console.print(
                f"\n[dim]Showing first {_PREVIEW_ROWS} of {len(result)} rows[/dim]"
            )

    except ValidationError as e:
        error_console.print(f"[bold red]Validation error:[/bold red] {str(e)}")
        sys.exit(1)
    except Exception as e:
        error_console.print(f"[bold red]Error:[/bold red] {str(e)}")
        logger.debug(f"Batch failed: {str(e)}", exc_info=True)
        sys.exit(1)
