"""Test classes CalculationRequest, CalculationResponse and the calculation outcomes."""
from pydantic import TypeAdapter, ValidationError
import pytest

from calculator_frontend.common.errors import ErrorKind
from calculator_frontend.common.operations import (
    CalculationFailure,
    CalculationOutcome,
    CalculationRequest,
    CalculationResponse,
    CalculationSuccess,
)


def test_calculation_request_valid() -> None:
    """Test that a valid CalculationRequest can be created."""
    req = CalculationRequest(expression="2+2*3")
    assert req.expression == "2+2*3"
    assert req.model_dump() == {"expression": "2+2*3"}


def test_calculation_request_invalid_type() -> None:
    """Test that non-string expressions raise a validation error."""
    with pytest.raises(ValidationError):
        # int instead of str
        CalculationRequest(expression=123)


@pytest.mark.parametrize("body,result", [
    ('{"result": 4}', 4.0),
    ('{"result": 2.5}', 2.5),
    ('{"result": -1e-7, "extra": true}', -1e-7),
])
def test_response_with_result(body: str, result: float) -> None:
    """Test that numeric results are decoded."""
    response = CalculationResponse.model_validate_json(body)
    assert response.result == result
    assert response.error is None


def test_response_with_error() -> None:
    """Test that error messages are decoded."""
    response = CalculationResponse.model_validate_json('{"error": "Division by zero"}')
    assert response.error == "Division by zero"
    assert response.result is None


@pytest.mark.parametrize("body", [
    "{}",
    '{"result": null}',
    '{"result": "4"}',
    '{"result": true}',
    '{"error": 12}',
    "[4]",
    "4",
    "<html>Internal Server Error</html>",
])
def test_response_rejects_malformed_payload(body: str) -> None:
    """Test that payloads without a numeric result or an error message are rejected."""
    with pytest.raises(ValidationError):
        CalculationResponse.model_validate_json(body)


def test_outcome_is_tagged() -> None:
    """Test that outcomes are told apart by their kind."""
    adapter = TypeAdapter(CalculationOutcome)

    success = adapter.validate_python({"kind": "success", "result": 4.0, "value": "4"})
    failure = adapter.validate_python({"kind": "failure", "error": "semantic", "message": "bad"})

    assert isinstance(success, CalculationSuccess)
    assert isinstance(failure, CalculationFailure)
    assert failure.error is ErrorKind.SEMANTIC


def test_success_requires_display_value() -> None:
    """Test that a success always carries something to display."""
    with pytest.raises(ValidationError):
        CalculationSuccess(result=4.0, value="")
