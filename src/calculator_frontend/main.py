"""
Command-line entrypoint of the calculator front end.

This script:
- Builds the controller, the presenter and the client from the CLI arguments
- Presses the given buttons in order, from the command line or from a file
- Prints the final display

The goal is to drive the calculator without a graphical toolkit:
- Button labels map to the same actions as on screen
- "=" sends the expression to the remote evaluator and waits for its answer
"""

import argparse
import asyncio
from pathlib import Path
import sys
from typing import List, Optional, TextIO

from pydantic import AnyHttpUrl, BaseModel, Field, FilePath, ValidationError

from calculator_frontend.client.client import CalculationClient
from calculator_frontend.common.logger import configure_logging, logger
from calculator_frontend.common.settings import DEFAULT_ENDPOINT, CalculatorSettings
from calculator_frontend.ui.console import ConsoleDisplay
from calculator_frontend.ui.controller import InputController
from calculator_frontend.ui.presenter import DisplayPresenter

LOG_LEVELS: List[str] = ["DEBUG", "INFO", "WARNING", "ERROR"]


class CliArgs(BaseModel):
    """
    Pydantic model used to validate CLI arguments.

    Attributes
    ----------
    labels : list of str
        Button labels pressed in order.
    file_path : FilePath, optional
        File with one button label per line, pressed before ``labels``.
    endpoint : AnyHttpUrl
        Remote evaluation endpoint.
    timeout : float, optional
        Total request timeout in seconds.
    log_level : str
        Logging level.
    echo : bool
        Print every render, not only the final display.
    """

    labels: List[str] = Field(default_factory=list)
    file_path: Optional[FilePath] = None
    endpoint: AnyHttpUrl = DEFAULT_ENDPOINT
    timeout: Optional[float] = Field(default=None, gt=0)
    log_level: str = "WARNING"
    echo: bool = False

    def settings(self) -> CalculatorSettings:
        return CalculatorSettings(endpoint=self.endpoint, timeout=self.timeout)


def parse_args(argv: Optional[List[str]] = None) -> CliArgs:
    """
    Parse and validate command-line arguments.

    :param argv: Arguments, sys.argv[1:] if None

    :return: Validated CLI arguments
    :rtype: CliArgs
    """
    parser = argparse.ArgumentParser(
        description="Press calculator buttons and print the display",
        epilog='Example: calculator-frontend -- 1 2 × 3 =',
    )

    parser.add_argument("labels", nargs="*", help="Button labels, pressed in order")
    parser.add_argument("-f", "--file", dest="file_path", help="File with one button label per line")
    parser.add_argument("--endpoint", default=DEFAULT_ENDPOINT, help="Remote evaluation endpoint")
    parser.add_argument("--timeout", type=float, help="Request timeout in seconds")
    parser.add_argument("--log-level", default="WARNING", choices=LOG_LEVELS, help="Logging level")
    parser.add_argument("--echo", action="store_true", help="Print every render")

    args = parser.parse_args(argv)

    try:
        return CliArgs(**{key: value for key, value in vars(args).items() if value is not None})
    except ValidationError as exc:
        parser.error(str(exc))


def read_labels(file_path: Path) -> List[str]:
    """
    Read button labels from a file, one per line.

    Blank lines are skipped.

    :param file_path: Path to the labels file
    :return: Button labels in file order
    """
    lines = file_path.read_text(encoding="utf-8").splitlines()
    return [line.strip() for line in lines if line.strip()]


async def run_presses(
    labels: List[str], settings: CalculatorSettings, stream: Optional[TextIO] = None
) -> str:
    """
    Press the buttons in order on a fresh calculator.

    A calculation is awaited before the next button is pressed.

    :param labels: Button labels
    :param settings: Application settings
    :param stream: Stream echoing every render, if any
    :return: Final display text
    """
    surface = ConsoleDisplay(stream)
    presenter = DisplayPresenter(surface, settings=settings)
    controller = InputController(presenter, CalculationClient.from_settings(settings), settings=settings)

    controller.start()
    for label in labels:
        task = controller.press(label)
        if task is not None:
            await task

    return surface.text


def main() -> None:
    """
    Main function executed by the console script.
    """
    cli_args = parse_args()
    configure_logging(cli_args.log_level)

    labels: List[str] = []
    if cli_args.file_path is not None:
        labels.extend(read_labels(Path(cli_args.file_path)))
    labels.extend(cli_args.labels)
    logger.info(f"🏁 Pressing {len(labels)} button(s)")

    display = asyncio.run(
        run_presses(labels, cli_args.settings(), sys.stdout if cli_args.echo else None)
    )
    print(display)


if __name__ == "__main__":
    main()
