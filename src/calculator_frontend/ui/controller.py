"""Dispatch button presses to the expression buffer, the client and the presenter."""
import asyncio
from enum import Enum
from typing import Optional, Set

from calculator_frontend.client.client import CalculationClient
from calculator_frontend.common.logger import logger
from calculator_frontend.common.operations import CalculationSuccess
from calculator_frontend.common.settings import CalculatorSettings
from calculator_frontend.ui.buffer import ExpressionBuffer
from calculator_frontend.ui.presenter import DisplayPresenter

ERROR_TEXT: str = "Error"


class Action(str, Enum):
    """Reserved button labels. Any other label is appended to the expression."""

    CLEAR = "AC"
    BACKSPACE = "⌫"
    EQUALS = "="
    TOGGLE_SIGN = "+/-"
    PERCENT = "%"


class CalculationState(str, Enum):
    IDLE = "idle"
    REQUESTING = "requesting"
    SUCCESS = "success"
    FAILED = "failed"


def classify(label: str) -> Optional[Action]:
    """
    Map a button label to its action.

    :param str label: Button label

    :return: The reserved action, None for a literal token
    :rtype: Optional[Action]
    """
    try:
        return Action(label)
    except ValueError:
        return None


class InputController:
    """
    Single owner of the calculator state.

    Lifecycle:
        - Created at application start with its presenter and client
        - Handles one button press at a time, re-rendering after each one
        - Lives for the process duration

    A press received while a calculation is outstanding is applied immediately;
    the calculation's completion then overwrites the expression.
    """

    def __init__(
        self,
        presenter: DisplayPresenter,
        client: CalculationClient,
        buffer: Optional[ExpressionBuffer] = None,
        settings: Optional[CalculatorSettings] = None,
    ) -> None:
        self.presenter = presenter
        self.client = client
        self.buffer = buffer or ExpressionBuffer()
        self.settings = settings or CalculatorSettings()
        self.state = CalculationState.IDLE
        # The event loop only keeps weak references to tasks
        self.calculations: Set["asyncio.Task[str]"] = set()

    @property
    def expression(self) -> str:
        return self.buffer.value

    def start(self) -> None:
        """Render the initial expression."""
        self.presenter.render(self.buffer.value)

    def press(self, label: str) -> Optional["asyncio.Task[str]"]:
        """
        Handle one button press.

        :param str label: Label of the pressed button

        :return: The calculation task for "=", None for every other action
        :rtype: Optional[asyncio.Task]
        """
        label = label.strip()
        if not label:
            logger.warning("🔘❓ Ignoring button press without label")
            return None

        logger.info(f"🔘 Button pressed: {label}")
        task: Optional["asyncio.Task[str]"] = None
        action = classify(label)

        if action is Action.EQUALS:
            # Needs a running event loop
            task = asyncio.get_running_loop().create_task(self.calculate())
            self.calculations.add(task)
            task.add_done_callback(self.calculations.discard)
        elif action is Action.CLEAR:
            self.buffer.clear()
        elif action is Action.BACKSPACE:
            self.buffer.backspace()
        elif action is Action.TOGGLE_SIGN:
            self.buffer.toggle_sign()
        elif action is Action.PERCENT:
            self.buffer.percent()
        else:
            self._append(label)

        self.presenter.render(self.buffer.value)
        return task

    def _append(self, token: str) -> None:
        """Append a literal token, flashing the highlight when the expression grows long."""
        before: int = len(self.buffer.value)
        self.buffer.append(token)

        threshold: int = self.settings.highlight_threshold
        if before < threshold <= len(self.buffer.value):
            self.presenter.flash_highlight()

    async def calculate(self) -> str:
        """
        Evaluate the current expression remotely and write the outcome back.

        :return: The new expression, the formatted result or "Error"
        :rtype: str
        """
        self.state = CalculationState.REQUESTING
        outcome = await self.client.evaluate(self.buffer.value)

        if isinstance(outcome, CalculationSuccess):
            self.state = CalculationState.SUCCESS
            self.buffer.replace(outcome.value)
            self.presenter.render(self.buffer.value)
        else:
            self.state = CalculationState.FAILED
            logger.error(f"🧮❌ Calculation error ({outcome.error.value}): {outcome.message}")
            self.buffer.replace(ERROR_TEXT)
            self.presenter.render(self.buffer.value)
            self.presenter.flash_error()

        self.state = CalculationState.IDLE
        return self.buffer.value
