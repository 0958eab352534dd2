"""
Batch evaluation of input tables.

This module provides the BatchInferenceRunner class that feeds every row of
a pandas DataFrame through an inference machine and collects the decisions.
"""

import logging

import pandas as pd

from fuzzrule import get_logger
from fuzzrule.errors import ErrorCodes, ProcessingError
from fuzzrule.fuzzy.inference import InferenceMachine
from fuzzrule.logging import log_data_operation

# Set up module-level logger
logger = get_logger(__name__)


class BatchInferenceRunner:
    """
    Evaluates an inference machine over many input rows.

    Example:
        ```python
        runner = BatchInferenceRunner(machine)
        inputs = pd.DataFrame({"temperature": [12.0, 24.0, 35.0]})
        decisions = runner.run(inputs)
        # decisions is a float Series indexed like inputs; rows without a
        # decision hold NaN
        ```
    """

    def __init__(self, machine: InferenceMachine):
        self._machine = machine

    @log_data_operation("evaluation", "input rows", log_level=logging.DEBUG)
    def run(self, frame: pd.DataFrame) -> pd.Series:
        """
        Compute one decision per row.

        Columns that are not inputs of the machine are ignored. The machine's
        input values, and the decision that goes with them, are restored after
        the run.

        Args:
            frame: DataFrame with one column per input variable

        Returns:
            Series of decisions named "decision", same index as ``frame``

        Raises:
            ProcessingError: If ``frame`` is not a DataFrame or shares no
                columns with the machine inputs
        """
        self._validate_inputs(frame)

        context = self._machine.context
        known = [column for column in frame.columns if column in context]
        ignored = [column for column in frame.columns if column not in context]
        if ignored:
            logger.warning(f"Ignoring columns that are not inputs: {ignored}")

        previous = context.values()
        decisions: list[float] = []
        try:
            for row in frame[known].itertuples(index=False, name=None):
                for name, value in zip(known, row):
                    context[name] = value
                decisions.append(self._machine.evaluate())
        finally:
            for name, value in previous.items():
                context[name] = value
            self._machine.evaluate()

        return pd.Series(decisions, index=frame.index, name="decision", dtype=float)

    def _validate_inputs(self, frame: pd.DataFrame) -> None:
        if not isinstance(frame, pd.DataFrame):
            logger.error(f"Invalid batch input type: {type(frame)}")
            raise ProcessingError(
                message=f"Batch input must be a pandas DataFrame, got {type(frame).__name__}",
                error_code=ErrorCodes.VALIDATION_INVALID_INPUT,
                details={"type": type(frame).__name__},
            )

        inputs = self._machine.context.names
        if len(frame.columns) > 0 and not any(column in inputs for column in frame.columns):
            logger.error(f"No input columns found in batch: {list(frame.columns)}")
            raise ProcessingError(
                message="Batch input has no columns matching the machine inputs",
                error_code=ErrorCodes.VALIDATION_INVALID_INPUT,
                details={"columns": list(frame.columns), "inputs": inputs},
            )
