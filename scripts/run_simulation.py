#!/usr/bin/env python
"""
Assess guessing strategies on a multiple-choice exam with a known answer
distribution.

Loads a preset (or a YAML config file), runs every strategy against every
distribution, prints a table per distribution and saves the results.
"""

import logging
from collections import deque
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import replace
from datetime import datetime
from pathlib import Path

import typer
from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.spinner import Spinner
from rich.table import Table
from rich.text import Text

from exam_simulator.assessment import (
    DistributionReport,
    expected_grade_for,
    run_assessment,
    save_results,
)
from exam_simulator.config import SimulationConfig, load_config
from exam_simulator.core.data_models import Distribution, ExamShape
from exam_simulator.presets import get_available_presets, get_preset
from exam_simulator.strategies import STRATEGIES

# Only show exam_simulator logs inside the live display
logging.getLogger("matplotlib").setLevel(logging.WARNING)
logging.getLogger("PIL").setLevel(logging.WARNING)
logging.getLogger("exam_simulator").setLevel(logging.WARNING)


MAX_VISIBLE_LOGS = 5


class _LogBuffer:
    """Ring buffer of recent log messages, renderable as dim Rich text."""

    def __init__(self, maxlen: int = MAX_VISIBLE_LOGS) -> None:
        self._messages: deque[str] = deque(maxlen=maxlen)

    def append(self, msg: str) -> None:
        self._messages.append(msg)

    def __rich__(self) -> Text:
        if not self._messages:
            return Text("")
        indented = "\n".join(f"  {m}" for m in self._messages)
        return Text(indented, style="dim")


class _BufferedLogHandler(logging.Handler):
    """Logging handler that appends log messages to a _LogBuffer."""

    def __init__(self, buffer: _LogBuffer) -> None:
        super().__init__()
        self._buffer = buffer

    def emit(self, record: logging.LogRecord) -> None:
        self._buffer.append(record.getMessage())


@contextmanager
def _capture_logs() -> Iterator[_LogBuffer]:
    """Temporarily route exam_simulator logs to a buffer for Live display."""
    logger = logging.getLogger("exam_simulator")
    prev_level = logger.level
    prev_propagate = logger.propagate
    log_buffer = _LogBuffer()
    handler = _BufferedLogHandler(log_buffer)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    logger.addHandler(handler)
    try:
        yield log_buffer
    finally:
        logger.removeHandler(handler)
        logger.setLevel(prev_level)
        logger.propagate = prev_propagate


ROOT_DIR = Path(__file__).parent.parent.absolute()
DEFAULT_OUTPUT_DIR = ROOT_DIR / "reports" / "simulation"

console = Console(force_terminal=True)
app = typer.Typer()


def build_table(report: DistributionReport, shape: ExamShape) -> Table:
    """Render the assessments of one distribution."""
    table = Table(title=f"Distribution {Distribution(report.distribution)}")
    table.add_column("Strategy")
    table.add_column("Average grade", justify="right")
    table.add_column("Expected", justify="right")
    table.add_column("Pass probability", justify="right")
    table.add_column("95% interval", justify="right")

    distribution = Distribution(report.distribution)
    for a in report.assessments:
        strategy = STRATEGIES.get(a.strategy_name)
        expected = (
            expected_grade_for(strategy, distribution, shape)
            if strategy is not None
            else None
        )
        low, high = a.pass_probability_interval()
        table.add_row(
            a.strategy_name,
            f"{a.average_grade:.3f}",
            "-" if expected is None else f"{expected:.3f}",
            f"{a.pass_probability:.4f}",
            f"[{low:.4f}, {high:.4f}]",
        )
    return table


def run_with_progress(
    iterator: Iterator[DistributionReport],
    n_distributions: int,
) -> list[DistributionReport]:
    """Consume reports while displaying a progress spinner."""
    reports: list[DistributionReport] = []
    with _capture_logs() as log_buffer:
        spinner = Spinner(
            "dots", text=f"[bold]Distribution 1/{n_distributions}..."
        )
        with Live(
            Group(spinner, log_buffer),
            console=console,
            refresh_per_second=10,
        ):
            for report in iterator:
                reports.append(report)
                completed = len(reports)
                if completed < n_distributions:
                    spinner.update(
                        text=f"[bold]Distribution {completed + 1}/{n_distributions}..."
                    )

    console.print(f"[green]✓[/green] Assessed {n_distributions} distributions")
    return reports


def _load(preset: str | None, config_path: Path | None) -> SimulationConfig:
    if preset is not None and config_path is not None:
        console.print(
            "[red]Error: Cannot specify both --preset and --config[/red]"
        )
        raise typer.Exit(1)

    if config_path is not None:
        if not config_path.exists():
            console.print(f"[red]Config file not found: {config_path}[/red]")
            raise typer.Exit(1)
        return load_config(config_path)

    name = preset or "default"
    available_presets = get_available_presets()
    if name not in available_presets:
        console.print(
            f"[red]Unknown preset: {name}[/red]\n"
            f"Available: {', '.join(available_presets)}"
        )
        raise typer.Exit(1)
    return get_preset(name)


@app.command()
def main(
    preset: str | None = typer.Option(
        None,
        "-p",
        "--preset",
        help="Preset name (defaults to 'default')",
    ),
    config_path: Path | None = typer.Option(
        None,
        "-c",
        "--config",
        help="Path to a YAML simulation config",
    ),
    n_iterations: int | None = typer.Option(
        None,
        "-n",
        "--n-iterations",
        help="Override the number of trials per strategy and distribution",
    ),
    seed: int | None = typer.Option(
        None,
        "-s",
        "--seed",
        help="Override the base random seed",
    ),
    n_workers: int | None = typer.Option(
        None,
        "-w",
        "--n-workers",
        help="Override the number of worker processes",
    ),
    output_dir: Path = typer.Option(
        DEFAULT_OUTPUT_DIR,
        "-o",
        "--output-dir",
        help="Output directory for results",
    ),
    save: bool = typer.Option(
        True,
        "--save/--no-save",
        help="Write summary.json, assessments.csv and a plot",
    ),
) -> None:
    """
    Assess guessing strategies against known answer distributions.
    """
    try:
        config = _load(preset, config_path)
        overrides = {
            "n_iterations": n_iterations,
            "random_seed": seed,
            "n_workers": n_workers,
        }
        config = replace(
            config, **{k: v for k, v in overrides.items() if v is not None}
        )
    except ValueError as e:
        console.print(f"[red]Invalid configuration: {e}[/red]")
        raise typer.Exit(1) from e

    shape = config.shape
    input_name = config_path.stem if config_path else (preset or "default")
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    report_dir = output_dir / input_name / timestamp

    console.print(
        Panel(
            f"[bold]Guessing Strategy Assessment[/bold]\n\n"
            f"Input: [cyan]{input_name}[/cyan]\n"
            f"Exam: [cyan]{shape.exam_length} questions, "
            f"{shape.options_per_question} options, "
            f"pass at {shape.pass_grade}[/cyan]\n"
            f"Strategies: [cyan]{', '.join(config.strategies)}[/cyan]\n"
            f"Iterations: [cyan]{config.n_iterations}[/cyan]\n"
            f"Workers: [cyan]{config.n_workers}[/cyan]\n"
            f"Output: [cyan]{report_dir if save else '-'}[/cyan]",
            title="Configuration",
        )
    )

    iterator = run_assessment(
        distributions=config.distribution_objects(),
        strategies=config.strategy_objects(),
        shape=shape,
        n_iterations=config.n_iterations,
        base_seed=config.random_seed,
        n_workers=config.n_workers,
    )
    reports = run_with_progress(iterator, len(config.distributions))

    console.print()
    for report in reports:
        if not report.is_valid:
            console.print(
                f"[red]Invalid distribution: "
                f"{Distribution(report.distribution)}[/red]\n"
            )
            continue
        console.print(build_table(report, shape))
        console.print()

    if save:
        params: dict[str, object] = {
            "input_name": input_name,
            "exam_length": shape.exam_length,
            "options_per_question": shape.options_per_question,
            "pass_grade": shape.pass_grade,
            "n_iterations": config.n_iterations,
            "random_seed": config.random_seed,
            "n_workers": config.n_workers,
            "strategies": list(config.strategies),
        }
        console.print("[dim]Saving results...[/dim]")
        save_results(reports, report_dir, params, shape=shape)
        console.print(f"[green]✓[/green] Results saved to {report_dir}")


if __name__ == "__main__":
    app()
