"""Test the command-line entrypoint."""
import asyncio
import io
import sys

import pytest

from calculator_frontend import main as cli
from calculator_frontend.common.settings import CalculatorSettings


def test_parse_args_defaults() -> None:
    """Labels are collected in order with the default endpoint."""
    args = cli.parse_args(["1", "+/-", "×", "="])
    assert args.labels == ["1", "+/-", "×", "="]
    assert args.file_path is None
    assert str(args.endpoint) == "http://127.0.0.1:5000/calculate"
    assert args.settings().timeout is None


def test_parse_args_options(tmp_path) -> None:
    """Options are validated into settings."""
    presses = tmp_path / "presses.txt"
    presses.write_text("1\n", encoding="utf-8")

    args = cli.parse_args(
        ["--file", str(presses), "--endpoint", "http://10.0.0.2:8000/calculate", "--timeout", "1.5", "--echo"]
    )

    assert args.file_path == presses
    assert args.echo
    settings = args.settings()
    assert str(settings.endpoint) == "http://10.0.0.2:8000/calculate"
    assert settings.timeout == 1.5


@pytest.mark.parametrize("argv", [
    ["--file", "does/not/exist.txt"],
    ["--endpoint", "not a url"],
    ["--timeout", "0"],
])
def test_parse_args_rejects_invalid(argv) -> None:
    """Invalid arguments exit with a usage error."""
    with pytest.raises(SystemExit):
        cli.parse_args(argv)


def test_read_labels(tmp_path) -> None:
    """Labels are read one per line, blank lines skipped."""
    presses = tmp_path / "presses.txt"
    presses.write_text("1\n\n 2 \n÷\n=\n", encoding="utf-8")

    assert cli.read_labels(presses) == ["1", "2", "÷", "="]


def test_run_presses(fake_session) -> None:
    """Each press is applied in order and calculations are awaited."""
    session = fake_session(body='{"result": 36}')

    display = asyncio.run(cli.run_presses(["1", "2", "×", "3", "="], CalculatorSettings()))

    assert display == "36"
    assert session.requests[0][1] == {"expression": "12*3"}


def test_run_presses_echo(fake_session) -> None:
    """Every render is echoed when a stream is given."""
    fake_session(body='{"result": 3}')
    stream = io.StringIO()

    asyncio.run(cli.run_presses(["1", "+", "2", "="], CalculatorSettings(), stream))

    assert stream.getvalue().splitlines() == [
        "[tier 0] 0",
        "[tier 0] 1",
        "[tier 0] 1+",
        "[tier 0] 1+2",
        "[tier 0] 1+2",
        "[tier 0] 3",
    ]


def test_main_prints_final_display(tmp_path, monkeypatch, capsys, fake_session) -> None:
    """The final display is printed, file labels before argv labels."""
    fake_session(status=500)
    presses = tmp_path / "presses.txt"
    presses.write_text("9\n÷\n", encoding="utf-8")
    monkeypatch.setattr(sys, "argv", ["calculator-frontend", "--file", str(presses), "0", "="])
    # Keep the project logger propagating to pytest's handlers
    monkeypatch.setattr(cli, "configure_logging", lambda level: None)

    cli.main()

    assert capsys.readouterr().out.strip() == "Error"
