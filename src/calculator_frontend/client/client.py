"""HTTP client for the remote expression evaluator."""
import asyncio
from typing import Any, Dict, Optional

import aiohttp
from pydantic import AnyHttpUrl, BaseModel, ConfigDict, Field, ValidationError

from calculator_frontend.common.errors import (
    CalculationError,
    ProtocolError,
    SemanticError,
    TransportError,
)
from calculator_frontend.common.formatter import format_number
from calculator_frontend.common.logger import logger
from calculator_frontend.common.operations import (
    CalculationFailure,
    CalculationOutcome,
    CalculationRequest,
    CalculationResponse,
    CalculationSuccess,
)
from calculator_frontend.common.settings import DEFAULT_ENDPOINT, CalculatorSettings

# Display glyphs and the operator symbols the evaluator understands
OPERATOR_SYMBOLS: Dict[str, str] = {
    "×": "*",
    "÷": "/",
}


def translate_operators(expression: str) -> str:
    """
    Replace display operator glyphs by their canonical symbols.

    The rest of the expression is passed through unchanged.

    :param str expression: Expression as shown on the display

    :return: Expression understood by the evaluator
    :rtype: str
    """
    for glyph, symbol in OPERATOR_SYMBOLS.items():
        expression = expression.replace(glyph, symbol)
    return expression


class CalculationClient(BaseModel):
    """
    HTTP client responsible for sending an expression to the evaluator and interpreting its answer.

    The HTTP client:
    - translates display glyphs into canonical operator symbols
    - posts exactly one request per evaluation, without retries
    - validates the response against the expected schema
    - maps every failure to a tagged CalculationFailure, never raising past evaluate()
    """

    # Make the Pydantic instance immutable (read-only), the endpoint does not change during execution
    model_config = ConfigDict(frozen=True)

    endpoint: AnyHttpUrl = Field(default=DEFAULT_ENDPOINT, description="Remote evaluation endpoint")
    timeout: Optional[float] = Field(default=None, gt=0, description="Total request timeout in seconds")

    @classmethod
    def from_settings(cls, settings: CalculatorSettings) -> "CalculationClient":
        """Build a client from the application settings."""
        return cls(endpoint=settings.endpoint, timeout=settings.timeout)

    def build_request(self, expression: str) -> CalculationRequest:
        """
        Build the request payload for an expression.

        :param str expression: Expression as shown on the display

        :return: Request with canonical operator symbols
        :rtype: CalculationRequest
        """
        return CalculationRequest(expression=translate_operators(expression))

    async def evaluate(self, expression: str) -> CalculationOutcome:
        """
        Evaluate an expression remotely.

        :param str expression: Expression as shown on the display

        :return: CalculationSuccess carrying the formatted result, or CalculationFailure
        :rtype: CalculationOutcome
        """
        request = self.build_request(expression)
        logger.info(f"✉️ Expression sent to evaluator: {request.expression}")

        try:
            response = await self._post(request)
            if response.error:
                raise SemanticError(response.error)
            if response.result is None:
                raise ProtocolError("Evaluator response carries an empty error and no result")
        except CalculationError as exc:
            return CalculationFailure(error=exc.kind, message=exc.message)

        return CalculationSuccess(result=response.result, value=format_number(response.result))

    def _session_options(self) -> Dict[str, Any]:
        """Keyword arguments for the HTTP session, the transport defaults apply when unset."""
        if self.timeout is None:
            return {}
        return {"timeout": aiohttp.ClientTimeout(total=self.timeout)}

    async def _post(self, request: CalculationRequest) -> CalculationResponse:
        """
        Send the request and decode the response.

        :param CalculationRequest request: Request payload

        :return: Validated response payload
        :rtype: CalculationResponse
        :raises TransportError: On network failure, timeout or non-2xx status
        :raises ProtocolError: If the body is not UTF-8 JSON matching the response schema
        """
        try:
            async with aiohttp.ClientSession(**self._session_options()) as session:
                async with session.post(str(self.endpoint), json=request.model_dump()) as resp:
                    if not 200 <= resp.status < 300:
                        raise TransportError(f"HTTP Error: {resp.status}")
                    body: bytes = await resp.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise TransportError(str(exc) or type(exc).__name__) from exc

        logger.info(f"📨 Evaluator response: {body.decode(errors='replace')}")

        try:
            return CalculationResponse.model_validate_json(body)
        except ValidationError as exc:
            raise ProtocolError(f"Malformed evaluator response: {exc.error_count()} validation error(s)") from exc
