"""Command line trainer for raise-first-in decisions."""

import logging
import random
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from .card import RANK_ORDER, Card, Suit, all_hand_labels, hand_type, parse_cards
from .config import get_config
from .deck import Deck
from .evaluator import Decision, DecisionEvaluator, EvaluationResult
from .notes import JsonNoteStore, NoteColor, PlayerNote, migrate_notes
from .position import Position, index_of, layout_for, non_blind_positions
from .ranges import RangeBook
from .session import Session, SessionStore
from .trainer import Trainer

app = typer.Typer(help="Preflop raise-first-in trainer")
notes_app = typer.Typer(help="Keep notes on opponents")
app.add_typer(notes_app, name="notes")
console = Console()


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def format_card(c: Card) -> str:
    """Format a card with color based on suit."""
    symbol = f"{c.rank.symbol}{c.suit.symbol}"
    if c.suit in (Suit.HEARTS, Suit.DIAMONDS):
        return f"[red]{symbol}[/red]"
    return f"[white]{symbol}[/white]"


def format_cards(cards: list[Card]) -> str:
    return " ".join(format_card(c) for c in cards)


def _seat_name(name: str | None) -> str:
    if name is None:
        return "Never"
    try:
        return Position(name).short
    except ValueError:
        return name


def _build_evaluator() -> DecisionEvaluator:
    config = get_config()
    strategy_file = config.trainer.strategy_file
    ranges = RangeBook.with_file(strategy_file) if strategy_file else RangeBook.default()
    return DecisionEvaluator(ranges=ranges, scoring=config.scoring)


def _parse_seat(value: str, table_size: int) -> str | None:
    """Parse a seat answer; 'never' means None."""
    value = value.strip().upper().replace("+", "")
    if value in ("NEVER", "N", "NONE", ""):
        return None
    if index_of(value, table_size) is None:
        raise ValueError(f"Unknown {table_size}-max position: {value}")
    return value


def _display_result(result: EvaluationResult, message: str | None = None) -> None:
    if result.is_correct:
        color, verdict = "green", "Correct"
    elif result.partially_correct:
        color, verdict = "yellow", "Close"
    else:
        color, verdict = "red", "Incorrect"

    answer = result.correct_answer
    body = f"[bold {color}]{verdict}[/bold {color}]\n"
    if message:
        body += f"[dim]{message}[/dim]\n"
    if result.message:
        body += f"[dim]{result.message}[/dim]\n"
    body += (
        f"Raise: {'yes' if answer.raise_decision else 'no'}  "
        f"Earliest position: {_seat_name(answer.earliest_position)}"
    )
    console.print(Panel(body, title="[bold magenta]Result[/bold magenta]", expand=False))


def _display_summary(session: Session) -> None:
    table = Table(title="Training Session Summary")
    table.add_column("Stat", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Strategy", f"{session.strategy_name.upper()}, {session.table_size}-handed")
    table.add_row("Hands played", str(session.total))
    table.add_row("Score", f"{session.correct}/{session.total}")
    table.add_row("Accuracy", f"{session.accuracy}%")
    table.add_row("Preflop raise %", f"{session.raise_percentage}%")
    console.print(table)

    if session.incorrect_decisions:
        wrong = Table(title=f"Incorrect Decisions ({len(session.incorrect_decisions)})")
        wrong.add_column("Hand")
        wrong.add_column("Position")
        wrong.add_column("You")
        wrong.add_column("Correct")
        for d in session.incorrect_decisions:
            wrong.add_row(
                f"{format_cards(d.cards)} ({d.hand_label})",
                _seat_name(d.position),
                f"{'Raise' if d.user_decision.raise_decision else 'Fold'} / "
                f"{_seat_name(d.user_decision.earliest_position)}",
                f"{'Raise' if d.correct_answer.raise_decision else 'Fold'} / "
                f"{_seat_name(d.correct_answer.earliest_position)}",
            )
        console.print(wrong)


@app.command()
def train(
    table_size: int | None = typer.Option(None, "--table-size", "-t", help="6 or 8 handed"),
    strategy: str | None = typer.Option(None, "--strategy", "-s", help="Strategy name"),
    hands: int = typer.Option(0, "--hands", "-n", help="Stop after N hands (0 = until 'quit')"),
    seed: int | None = typer.Option(None, "--seed", help="RNG seed for reproducible deals"),
):
    """Deal hands and grade your raise-first-in decisions."""
    config = get_config()
    table_size = table_size or config.trainer.table_size
    strategy = strategy or config.trainer.strategy

    try:
        trainer = Trainer(
            table_size=table_size,
            strategy=strategy,
            evaluator=_build_evaluator(),
            deck=Deck(rng=random.Random(seed)),
            store=SessionStore(config.storage.session_file),
        )
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    seats = "/".join(Position(p).short for p in non_blind_positions(table_size))
    console.print(Panel(f"[bold]Raise First In (RFI): {strategy.upper()}, {table_size}-handed[/bold]"))
    console.print(f"[dim]Earliest position: {seats} or 'never'. Type 'quit' to exit.[/dim]\n")

    trainer.deal()
    try:
        while True:
            console.print(
                f"[bold cyan]{trainer.position}[/bold cyan]  {format_cards(trainer.hand)}"
            )
            answer = Prompt.ask("[bold]Raise?[/bold]", choices=["y", "n", "quit"], default="n")
            if answer == "quit":
                break
            while True:
                seat = Prompt.ask("[bold]Earliest position[/bold]", default="never")
                if seat.lower() == "quit":
                    break
                try:
                    earliest = _parse_seat(seat, table_size)
                    break
                except ValueError as e:
                    console.print(f"[red]{e}[/red]")
            if seat.lower() == "quit":
                break

            feedback = trainer.submit(Decision(raise_decision=answer == "y", earliest_position=earliest))
            _display_result(feedback.result, feedback.message)
            console.print(
                f"Score: {trainer.session.correct}/{trainer.session.total} "
                f"({trainer.session.accuracy}%)\n"
            )
            if hands and trainer.session.total >= hands:
                break
            trainer.next_hand()
    except KeyboardInterrupt:
        console.print("\n[dim]Exiting...[/dim]")

    _display_summary(trainer.session)


@app.command()
def check(
    hand: str = typer.Argument(..., help="Hole cards ('As Kd') or a hand label ('AKo')"),
    position: str = typer.Argument(..., help="Your position, e.g. CO"),
    raise_decision: bool = typer.Option(False, "--raise/--fold", help="Your raise/fold call"),
    earliest: str = typer.Option("never", "--earliest", "-e", help="Earliest position to raise from"),
    table_size: int | None = typer.Option(None, "--table-size", "-t", help="6 or 8 handed"),
    strategy: str | None = typer.Option(None, "--strategy", "-s", help="Strategy name"),
):
    """Grade a single decision."""
    config = get_config()
    table_size = table_size or config.trainer.table_size
    strategy = strategy or config.trainer.strategy
    try:
        layout_for(table_size)
        evaluator = _build_evaluator()
        decision = Decision(raise_decision=raise_decision, earliest_position=_parse_seat(earliest, table_size))
        position = position.strip().upper().replace("+", "")
        if index_of(position, table_size) is None:
            raise ValueError(f"Unknown {table_size}-max position: {position}")

        if " " in hand.strip() or "," in hand:
            cards = parse_cards(hand)
            if len(cards) != 2:
                raise ValueError(f"Expected 2 hole cards, got {len(cards)}")
            console.print(f"\n[bold]Hand:[/bold]     {format_cards(cards)}")
            result = evaluator.evaluate_cards(cards, position, table_size, decision, strategy)
        else:
            hand_type(hand)
            console.print(f"\n[bold]Hand:[/bold]     {hand}")
            result = evaluator.evaluate(hand, position, table_size, decision, strategy)
        console.print(f"[bold]Position:[/bold] {Position(position).label}\n")
        _display_result(result)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def chart(
    table_size: int | None = typer.Option(None, "--table-size", "-t", help="6 or 8 handed"),
    position: str | None = typer.Option(None, "--position", "-p", help="Highlight hands opened from this seat"),
    strategy: str | None = typer.Option(None, "--strategy", "-s", help="Strategy name"),
):
    """Show the 13x13 opening chart with each hand's earliest position."""
    config = get_config()
    table_size = table_size or config.trainer.table_size
    strategy = strategy or config.trainer.strategy
    try:
        layout_for(table_size)
        ranges = _build_evaluator().ranges
        opened = None
        if position:
            position = position.strip().upper().replace("+", "")
            opened = set(ranges.raising_labels(table_size, position, strategy))

        table = Table(title=f"{strategy.upper()} RFI, {table_size}-handed", show_lines=False)
        labels = all_hand_labels()
        table.add_column("")
        for r in RANK_ORDER:
            table.add_column(r, justify="center")
        for i, r1 in enumerate(RANK_ORDER):
            row = []
            for label in labels[i * 13:(i + 1) * 13]:
                seat = ranges.earliest_position(label, table_size, strategy)
                text = Position(seat).short if seat else "·"
                if opened is not None:
                    text = f"[green]{text}[/green]" if label in opened else f"[dim]{text}[/dim]"
                row.append(text)
            table.add_row(r1, *row)
        console.print(table)

        if position:
            pct = ranges.range_percentage(table_size, position, strategy)
            console.print(f"[bold]{position}[/bold] opens [green]{pct:.1f}%[/green] of hands")
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


# ── Player notes ────────────────────────────────────────────


_NOTE_STYLES = {
    NoteColor.RED: "red",
    NoteColor.YELLOW: "yellow",
    NoteColor.GREEN: "green",
    NoteColor.BLUE: "blue",
    NoteColor.PURPLE: "magenta",
    NoteColor.ORANGE: "dark_orange",
    NoteColor.GRAY: "bright_black",
    NoteColor.BLACK: "black",
}


def _note_store(path: Path | None = None) -> JsonNoteStore:
    return JsonNoteStore(path or get_config().storage.notes_file)


@notes_app.command("add")
def notes_add(
    username: str = typer.Argument(..., help="Opponent's username"),
    note: str = typer.Option("", "--note", "-n", help="Note text"),
    color: NoteColor = typer.Option(NoteColor.GRAY, "--color", "-c", help="Tag color"),
    vpip_pfr: str = typer.Option("", "--stats", help="VPIP/PFR, e.g. 24/19"),
):
    """Add or replace a note."""
    store = _note_store()
    if not store.save(PlayerNote(username=username, note=note, color=color, vpip_pfr=vpip_pfr)):
        console.print(f"[red]Error: could not save note for {username}[/red]")
        raise typer.Exit(1)
    console.print(f"Saved note for [bold]{username}[/bold]")


@notes_app.command("list")
def notes_list(
    search: str | None = typer.Option(None, "--search", "-q", help="Username prefix"),
):
    """List notes."""
    store = _note_store()
    notes = store.search(search) if search else store.fetch_all()
    if not notes:
        console.print("[dim]No player notes.[/dim]")
        return
    table = Table(title=f"Player Notes ({len(notes)})")
    table.add_column("Player", style="bold")
    table.add_column("VPIP/PFR", justify="right")
    table.add_column("Note")
    table.add_column("Updated", style="dim")
    for n in sorted(notes, key=lambda n: n.key):
        style = _NOTE_STYLES[n.color]
        table.add_row(f"[{style}]●[/{style}] {n.username}", n.vpip_pfr, n.note, n.updated_at or "")
    console.print(table)


@notes_app.command("show")
def notes_show(username: str = typer.Argument(..., help="Opponent's username")):
    """Show one note."""
    note = _note_store().get(username)
    if note is None:
        console.print(f"[red]No note for {username}[/red]")
        raise typer.Exit(1)
    console.print(
        Panel(
            f"{note.note or '[dim]no text[/dim]'}\n"
            f"[dim]VPIP/PFR: {note.vpip_pfr or '-'}  Color: {note.color.value}[/dim]",
            title=f"[bold]{note.username}[/bold]",
            expand=False,
        )
    )


@notes_app.command("delete")
def notes_delete(username: str = typer.Argument(..., help="Opponent's username")):
    """Delete a note."""
    if not _note_store().delete(username):
        console.print(f"[red]Error: could not delete note for {username}[/red]")
        raise typer.Exit(1)
    console.print(f"Deleted note for [bold]{username}[/bold]")


@notes_app.command("import")
def notes_import(
    source: Path = typer.Argument(..., help="JSON notes file to import"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation"),
):
    """Import notes from another notes file, removing it once verified."""
    src = JsonNoteStore(source)
    found = src.fetch_all()
    if not found:
        console.print("[dim]No notes to import.[/dim]")
        return
    if not yes and not typer.confirm(f"Import {len(found)} player note(s)?"):
        return
    report = migrate_notes(src, _note_store())
    if report.complete:
        console.print(f"[green]Successfully imported {report.imported} notes.[/green]")
    else:
        console.print(
            f"[yellow]Warning: only {report.verified} out of {report.found} notes were "
            f"verified. The source notes were kept.[/yellow]"
        )


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
