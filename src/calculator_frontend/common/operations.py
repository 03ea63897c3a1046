"""Pydantic models for calculation requests, responses and outcomes."""
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from calculator_frontend.common.errors import ErrorKind


class CalculationRequest(BaseModel):
    """Represents the payload sent to the remote evaluator."""

    model_config = ConfigDict(frozen=True)

    expression: str = Field(..., description="Expression with canonical operator symbols")


class CalculationResponse(BaseModel):
    """
    Represents the payload returned by the remote evaluator.

    Exactly what the evaluator promises: a numeric ``result`` or an ``error`` message.
    Anything else fails validation.
    """

    model_config = ConfigDict(frozen=True)

    result: Optional[float] = Field(default=None, strict=True, description="Evaluated numeric result")
    error: Optional[str] = Field(default=None, description="Evaluation error message")

    @model_validator(mode="after")
    def result_or_error_required(self) -> "CalculationResponse":
        """Ensure that the payload carries a result or an error."""
        if self.result is None and self.error is None:
            raise ValueError("Response carries neither 'result' nor 'error'")
        return self


class CalculationSuccess(BaseModel):
    """A successful calculation, with its result already formatted for display."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["success"] = "success"
    result: float = Field(..., description="Raw numeric result")
    value: str = Field(..., min_length=1, description="Result formatted for display")


class CalculationFailure(BaseModel):
    """A failed calculation."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["failure"] = "failure"
    error: ErrorKind = Field(..., description="Where the calculation failed")
    message: str = Field(..., description="Human-readable failure message")


CalculationOutcome = Annotated[
    Union[CalculationSuccess, CalculationFailure], Field(discriminator="kind")
]
