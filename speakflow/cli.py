"""
speakflow CLI - study any content domain from the terminal.

Commands:
    speakflow seed <domain>     - Load the domain's sample items
    speakflow due <domain>      - Items due for review today
    speakflow stats <domain>    - Mastery breakdown
    speakflow quiz <domain>     - Multiple-choice (or typed) quiz session
    speakflow review <domain>   - Flashcard review of due items
    speakflow weak              - Grammar topics answered wrong
    speakflow reset <domain>    - Delete the stored progress
"""
from __future__ import annotations

from datetime import date
from typing import Optional

import typer
from rich import print as rprint
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from speakflow.config import get_settings
from speakflow.core.errors import InsufficientPool
from speakflow.core.items import ItemFilter
from speakflow.core.mastery import MasteryLevel
from speakflow.delivery.repository import ItemRepository
from speakflow.delivery.scheduler import FlashcardRating
from speakflow.delivery.state_store import JsonFileStore, load_repository
from speakflow.domains import DOMAINS, Domain, get_domain
from speakflow.domains.grammar import TOPICS_BY_ID, GrammarProgress
from speakflow.log_setup import configure_logging
from speakflow.session.engine import SessionEngine
from speakflow.session.flashcards import FlashcardSession

console = Console()

app = typer.Typer(
    name="speakflow",
    help="Spaced-repetition review for vocabulary, word bank, and grammar",
    no_args_is_help=True,
)

GRAMMAR_PROGRESS_KEY = "grammar-progress"


class XpCounter:
    """Reward callback that tallies XP for the session summary."""

    def __init__(self):
        self.total = 0

    def __call__(self, amount: int) -> None:
        self.total += amount


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override SPEAKFLOW_LOG_LEVEL"),
) -> None:
    configure_logging(log_level or get_settings().log_level)


def _store() -> JsonFileStore:
    return JsonFileStore(get_settings().data_dir)


def _resolve(domain_name: str) -> Domain:
    domain = get_domain(domain_name)
    if domain is None:
        rprint(f"[red]Unknown domain:[/red] {domain_name} (choose from {', '.join(sorted(DOMAINS))})")
        raise typer.Exit(code=2)
    return domain


def _open(domain_name: str) -> tuple[Domain, ItemRepository]:
    domain = _resolve(domain_name)
    return domain, load_repository(_store(), domain.name, domain.content_factory)


def _mastery_cell(level: MasteryLevel) -> str:
    return f"[{level.color}]{level.display_name}[/{level.color}]"


@app.command("seed")
def seed(domain_name: str = typer.Argument(..., metavar="DOMAIN")) -> None:
    """Load the domain's sample items. Existing progress is kept."""
    domain, repo = _open(domain_name)
    added = repo.add_items(domain.samples(), date.today())
    rprint(f"[green]Added {added} items[/green] to {domain.title} ({len(repo)} total)")


@app.command("due")
def due(
    domain_name: str = typer.Argument(..., metavar="DOMAIN"),
    limit: int = typer.Option(20, "--limit", "-n", help="Rows to show"),
) -> None:
    """Show items due for review today, oldest first."""
    domain, repo = _open(domain_name)
    today = date.today()
    items = repo.get_due(today)

    if not items:
        rprint(f"[green][OK][/green] Nothing due in {domain.title}")
        return

    table = Table(title=f"{domain.title}: {len(items)} due")
    table.add_column("Prompt")
    table.add_column("Answer", style="dim")
    table.add_column("Mastery")
    table.add_column("Overdue", justify="right")
    for item in items[:limit]:
        table.add_row(
            item.content.prompt_text,
            item.content.answer_text,
            _mastery_cell(item.mastery),
            f"{item.state.days_overdue(today)}d",
        )
    console.print(table)


@app.command("stats")
def stats(domain_name: str = typer.Argument(..., metavar="DOMAIN")) -> None:
    """Show item counts per mastery level."""
    domain, repo = _open(domain_name)
    summary = repo.stats(date.today())

    table = Table(title=f"{domain.title} progress")
    table.add_column("Level")
    table.add_column("Items", justify="right")
    for level in MasteryLevel:
        table.add_row(_mastery_cell(level), str(summary.count(level)))
    table.add_section()
    table.add_row("Total", str(summary.total))
    table.add_row("Due today", str(summary.due))
    console.print(table)


@app.command("quiz")
def quiz(
    domain_name: str = typer.Argument(..., metavar="DOMAIN"),
    level: Optional[str] = typer.Option(None, "--level", help="Only this level"),
    category: Optional[str] = typer.Option(None, "--category", help="Only this category"),
    topic: Optional[str] = typer.Option(None, "--topic", help="Only this topic"),
    count: Optional[int] = typer.Option(None, "--count", "-c", min=1, help="Number of questions"),
) -> None:
    """Run a scored quiz session."""
    domain, repo = _open(domain_name)
    xp = XpCounter()
    engine = SessionEngine(repo, on_correct_answer=xp)

    progress: GrammarProgress | None = None
    if domain.name == "grammar":
        store = _store()
        progress = GrammarProgress.from_dict(store.get(GRAMMAR_PROGRESS_KEY) or {})
        engine.add_answer_listener(progress.listener(repo))

    item_filter = ItemFilter(level=level, category=category, topic=topic)
    try:
        session = engine.start(item_filter=item_filter, count=count, mode=domain.quiz_mode)
    except InsufficientPool as e:
        rprint(f"[yellow]Not enough items for {item_filter.describe()}:[/yellow] {e}")
        rprint("Try a broader filter, or run [bold]speakflow seed[/bold] first.")
        raise typer.Exit(code=1)

    for number, question in enumerate(session.questions, start=1):
        body = question.prompt
        if question.is_multiple_choice:
            body += "\n\n" + "\n".join(
                f"  {index}. {option}" for index, option in enumerate(question.options, start=1)
            )
        console.print(Panel(body, title=f"Question {number}/{session.total_questions}", border_style="cyan"))

        if question.is_multiple_choice:
            choice = Prompt.ask(
                "Your answer",
                choices=[str(i) for i in range(1, len(question.options) + 1)],
            )
            submitted = question.options[int(choice) - 1]
        else:
            submitted = Prompt.ask("Your answer")

        outcome = engine.answer(submitted)
        if outcome.correct:
            rprint(f"[green]Correct![/green] +{outcome.xp_awarded} XP")
        else:
            rprint(f"[red]Incorrect.[/red] Answer: [bold]{outcome.correct_answer}[/bold]")
            explanation = getattr(outcome.item.content, "explanation", "")
            if explanation:
                rprint(f"[dim]{explanation}[/dim]")
        engine.advance()

    summary = engine.end()
    if progress is not None:
        _store().set(GRAMMAR_PROGRESS_KEY, progress.to_dict())

    console.print(
        Panel(
            f"Score: {summary.score}/{summary.total_questions} "
            f"({summary.accuracy:.0%})\nXP earned: {xp.total}",
            title="[bold]Quiz complete[/bold]",
            border_style="green",
        )
    )


@app.command("review")
def review(
    domain_name: str = typer.Argument(..., metavar="DOMAIN"),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", min=1, help="Maximum cards"),
) -> None:
    """Flashcard review of due items: reveal, then rate 1-4."""
    domain, repo = _open(domain_name)
    xp = XpCounter()
    cards = FlashcardSession(repo, on_correct_answer=xp)

    try:
        deck = cards.start(limit=limit)
    except InsufficientPool:
        rprint(f"[green][OK][/green] Nothing due in {domain.title}")
        return

    ratings = "  ".join(f"{r.value}={r.label}" for r in FlashcardRating)
    for number in range(1, len(deck.card_ids) + 1):
        item = cards.current_card
        console.print(Panel(item.content.prompt_text, title=f"Card {number}/{len(deck.card_ids)}", border_style="cyan"))
        Prompt.ask("Press Enter to reveal", default="", show_default=False)
        console.print(Panel(cards.reveal(), border_style="blue"))

        choice = Prompt.ask(ratings, choices=[str(r.value) for r in FlashcardRating])
        outcome = cards.rate(int(choice))
        rprint(f"Next review in {outcome.item.state.interval} day(s)")

    summary = cards.end()
    console.print(
        Panel(
            f"Remembered: {summary.score}  Forgot: {summary.incorrect}\nXP earned: {xp.total}",
            title="[bold]Review complete[/bold]",
            border_style="green",
        )
    )


@app.command("weak")
def weak() -> None:
    """List grammar topics answered wrong, with per-topic accuracy."""
    progress = GrammarProgress.from_dict(_store().get(GRAMMAR_PROGRESS_KEY) or {})
    if not progress.weak_points:
        rprint("[green][OK][/green] No weak grammar topics yet")
        return

    table = Table(title="Weak grammar topics")
    table.add_column("Topic")
    table.add_column("Attempts", justify="right")
    table.add_column("Accuracy", justify="right")
    for topic_id in progress.weak_points:
        topic = TOPICS_BY_ID.get(topic_id)
        tally = progress.topics.get(topic_id)
        table.add_row(
            topic.title if topic else topic_id,
            str(tally.attempts if tally else 0),
            f"{tally.accuracy:.0%}" if tally else "-",
        )
    console.print(table)


@app.command("reset")
def reset(
    domain_name: str = typer.Argument(..., metavar="DOMAIN"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete all stored items and progress for a domain."""
    domain = _resolve(domain_name)
    if not yes and not Confirm.ask(f"Delete all {domain.title} progress?"):
        raise typer.Abort()

    store = _store()
    removed = store.delete(domain.name)
    if domain.name == "grammar":
        store.delete(GRAMMAR_PROGRESS_KEY)
    rprint(f"[green]Reset {domain.title}[/green]" if removed else f"Nothing stored for {domain.title}")


def run() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    run()
