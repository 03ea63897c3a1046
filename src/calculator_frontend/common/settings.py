"""Runtime configuration of the calculator front end."""
from typing import Optional

from pydantic import AnyHttpUrl, BaseModel, ConfigDict, Field

DEFAULT_ENDPOINT: str = "http://127.0.0.1:5000/calculate"


class CalculatorSettings(BaseModel):
    """
    Settings shared by the client, the presenter and the controller.

    Frozen: the configuration does not change while the application runs.
    """

    model_config = ConfigDict(frozen=True)

    endpoint: AnyHttpUrl = Field(default=DEFAULT_ENDPOINT, description="Remote evaluation endpoint")
    timeout: Optional[float] = Field(
        default=None, gt=0, description="Total request timeout in seconds, transport default if unset"
    )
    highlight_threshold: int = Field(
        default=20, ge=1, description="Expression length that triggers the highlight flash"
    )
    highlight_duration: float = Field(default=0.3, gt=0, description="Highlight flash duration in seconds")
    error_duration: float = Field(default=0.5, gt=0, description="Error flash duration in seconds")
