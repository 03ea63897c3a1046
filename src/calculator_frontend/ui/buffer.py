"""The expression being typed on the calculator."""
import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from calculator_frontend.common.formatter import format_number

INITIAL_EXPRESSION: str = "0"

# Trailing number of an expression, e.g. "34" in "12+34" or "-5" in "3×-5"
TRAILING_NUMBER: re.Pattern = re.compile(r"-?\d+\.?\d*\Z")


def trailing_number(expression: str) -> Optional[re.Match]:
    """
    Locate the trailing numeric token of an expression.

    :param str expression: Expression text

    :return: Match of the trailing number, None if the expression does not end with one
    :rtype: Optional[re.Match]
    """
    return TRAILING_NUMBER.search(expression)


def replace_trailing_number(expression: str, replacement: str) -> str:
    """
    Replace the trailing numeric token of an expression.

    :param str expression: Expression text
    :param str replacement: Text put in place of the trailing number

    :return: Updated expression, unchanged if it does not end with a number
    :rtype: str
    """
    match = trailing_number(expression)
    if match is None:
        return expression
    return expression[: match.start()] + replacement


class ExpressionBuffer(BaseModel):
    """
    Holds the expression as a single text value.

    Every operation mutates the buffer in place and returns the new value.
    The value can never be empty, assignments are validated.
    """

    model_config = ConfigDict(validate_assignment=True)

    value: str = Field(default=INITIAL_EXPRESSION, min_length=1, description="Current expression text")

    def append(self, token: str) -> str:
        """Append a digit or operator, replacing the initial "0" wholesale."""
        if self.value == INITIAL_EXPRESSION:
            self.value = token
        else:
            self.value += token
        return self.value

    def clear(self) -> str:
        self.value = INITIAL_EXPRESSION
        return self.value

    def backspace(self) -> str:
        """Remove the last character, a single remaining character resets the buffer."""
        self.value = INITIAL_EXPRESSION if len(self.value) == 1 else self.value[:-1]
        return self.value

    def toggle_sign(self) -> str:
        """Flip the sign of the trailing number only."""
        if self.value == INITIAL_EXPRESSION:
            return self.value

        match = trailing_number(self.value)
        if match is not None:
            number: str = match.group()
            negated: str = number[1:] if number.startswith("-") else f"-{number}"
            self.value = replace_trailing_number(self.value, negated)
        return self.value

    def percent(self) -> str:
        """Replace the trailing number by its hundredth."""
        match = trailing_number(self.value)
        if match is not None:
            self.value = replace_trailing_number(self.value, format_number(float(match.group()) / 100))
        return self.value

    def replace(self, value: str) -> str:
        """Overwrite the whole expression, e.g. with a calculation result."""
        self.value = value
        return self.value
