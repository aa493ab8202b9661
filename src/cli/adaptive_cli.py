"""
Adaptive Engine CLI.

Runs the engine offline against a JSON fixture of attempts and items.

Commands:
    asvab-adaptive sequence <fixture> <learner> <topic>  - Build a practice sequence
    asvab-adaptive prioritize <fixture> <learner>        - Rank topics for study
    asvab-adaptive path <fixture> <learner>              - Plan a learning path
"""
from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Optional

import typer
from loguru import logger
from rich import print as rprint
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from config import get_settings
from src.adaptive.difficulty_adjuster import build_predictor
from src.adaptive.learning_engine import LearningEngine
from src.core.exceptions import AdaptiveEngineError
from src.core.schemas import EngineFixture

console = Console()

app = typer.Typer(
    name="asvab-adaptive",
    help="Adaptive question sequencing and topic planning",
    no_args_is_help=True,
)


def _load_engine(fixture_path: Path, seed: Optional[int] = None, deterministic: bool = False) -> LearningEngine:
    fixture = EngineFixture.from_file(fixture_path)
    settings = get_settings()
    predictor = None
    if deterministic or seed is not None:
        predictor = build_predictor("deterministic" if deterministic else "simulated", seed)
    return LearningEngine(
        fixture.history_provider(),
        fixture.pool_provider(),
        settings=settings,
        predictor=predictor,
    )


def _format_level_bar(level: float, width: int = 10) -> str:
    """Format a 1-10 level as a bar."""
    filled = int(round(level / 10 * width))
    return "#" * filled + "-" * (width - filled)


@app.command("sequence")
def sequence(
    fixture: Path = typer.Argument(..., exists=True, readable=True, help="JSON fixture"),
    learner_id: str = typer.Argument(..., help="Learner identifier"),
    topic: str = typer.Argument(..., help="Topic to practise"),
    max_items: int = typer.Option(10, "--max-items", "-n", help="Sequence length"),
    adaptive: bool = typer.Option(True, "--adaptive/--fixed", help="Pace difficulty while building"),
    audience: Optional[str] = typer.Option(None, "--audience", help="Required eligibility tag"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for simulated look-ahead"),
    deterministic: bool = typer.Option(False, "--deterministic", help="Use the fixed look-ahead rule"),
) -> None:
    """Build an adaptive practice sequence."""
    engine = _load_engine(fixture, seed, deterministic)
    try:
        result = asyncio.run(
            engine.build_sequence(learner_id, topic, max_items, adaptive, audience=audience)
        )
    except AdaptiveEngineError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)

    estimate = result.estimate
    rprint(
        f"[bold]Proficiency:[/bold] {_format_level_bar(estimate.level)} "
        f"{estimate.level:.1f}/10 ({estimate.sample_size} attempts)"
    )

    if result.is_empty:
        rprint(f"[yellow]{result.reason}[/yellow]")
        return

    table = Table(title=f"Sequence for {learner_id} - {topic}")
    table.add_column("#", justify="right")
    table.add_column("Item")
    table.add_column("Tier")
    table.add_column("Expected", justify="right")
    table.add_column("Confidence", justify="right")
    table.add_column("Rationale")

    for entry in result:
        table.add_row(
            str(entry.position + 1),
            entry.item.id,
            entry.item.difficulty_tier.value,
            f"{entry.expected_difficulty:.1f}",
            f"{entry.selection_confidence:.0%}",
            entry.rationale.value + (" [dim](relaxed)[/dim]" if entry.window_relaxed else ""),
        )
    console.print(table)


@app.command("prioritize")
def prioritize(
    fixture: Path = typer.Argument(..., exists=True, readable=True, help="JSON fixture"),
    learner_id: str = typer.Argument(..., help="Learner identifier"),
    topics: Optional[list[str]] = typer.Option(None, "--topic", "-t", help="Topics to rank (repeatable)"),
) -> None:
    """Rank topics by how much work they need."""
    engine = _load_engine(fixture)
    try:
        priorities = asyncio.run(engine.prioritize_topics(learner_id, topics or engine.known_topics))
    except AdaptiveEngineError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)

    table = Table(title=f"Topic priorities for {learner_id}")
    table.add_column("Rank", justify="right")
    table.add_column("Topic")
    table.add_column("Proficiency")
    table.add_column("Accuracy", justify="right")
    table.add_column("Attempts", justify="right")
    table.add_column("Status")

    for p in priorities:
        table.add_row(
            str(p.priority_rank),
            p.topic,
            f"{_format_level_bar(p.proficiency)} {p.proficiency:.1f}",
            f"{p.accuracy:.0%}" if p.attempts else "-",
            str(p.attempts),
            "[red][!][/red] needs work" if p.needs_work else "[green][OK][/green]",
        )
    console.print(table)


@app.command("path")
def path(
    fixture: Path = typer.Argument(..., exists=True, readable=True, help="JSON fixture"),
    learner_id: str = typer.Argument(..., help="Learner identifier"),
) -> None:
    """Plan a multi-topic learning path."""
    engine = _load_engine(fixture)
    try:
        plan = asyncio.run(engine.plan_learning_path(learner_id))
    except AdaptiveEngineError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)

    lines = [f"[bold]Level:[/bold] {plan.skill_level.value}",
             f"[bold]Estimated:[/bold] {plan.estimated_duration_minutes} minutes", ""]
    for i, milestone in enumerate(plan.milestones, start=1):
        lines.append(
            f"{i}. {milestone.topic} - target {milestone.target_accuracy:.0%}, "
            f"~{milestone.estimated_questions} questions"
        )
    lines.append("")
    lines.append(f"[dim]{plan.reasoning}[/dim]")

    console.print(Panel("\n".join(lines), title="[bold]Learning Path[/bold]", border_style="blue"))


def run() -> None:
    """CLI entry point."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=get_settings().log_level,
        format="<level>{message}</level>",
    )
    app()


if __name__ == "__main__":
    run()
