"""Interactive period picker (prompt_toolkit-based).

Kept separate from rendering so it can be driven from a pipe in tests.
"""

from __future__ import annotations

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.validation import ValidationError, Validator

from .models import Period

NEXT_WORDS = ("n", "next")
PREV_WORDS = ("p", "prev", "previous")
QUIT_WORDS = ("q", "quit", "exit")


def resolve_period_input(text: str, current: Period) -> Period | None:
    """Map one line of input to the next period selection.

    Returns ``None`` for quit; raises ``ValueError`` for unrecognized input.
    Empty input keeps the current period.
    """

    s = text.strip().lower()
    if not s:
        return current
    if s in QUIT_WORDS:
        return None
    if s in NEXT_WORDS:
        return current.next()
    if s in PREV_WORDS:
        return current.previous()
    return Period.parse(s)


def _neighbour_months(current: Period) -> list[str]:
    # Stepping past year 1 or 9999 is invalid; offer only the months that exist.
    out: list[str] = []
    for step in (current.next, current.previous):
        try:
            out.append(step().prefix.rstrip("-"))
        except ValueError:
            continue
    return out


class _PeriodValidator(Validator):
    def __init__(self, current: Period) -> None:
        self._current = current

    def validate(self, document) -> None:
        try:
            resolve_period_input(document.text, self._current)
        except ValueError as exc:
            raise ValidationError(message=str(exc), cursor_position=len(document.text)) from None


def prompt_period(
    current: Period,
    *,
    session: PromptSession | None = None,
    message: str = "Period (YYYY-MM, n/p, q to quit): ",
) -> Period | None:
    """Ask for the next period; ``None`` means the user wants to quit.

    Ctrl-D and Ctrl-C are treated as quit.
    """

    sess = session or PromptSession()
    completer = WordCompleter([*_neighbour_months(current), "next", "prev", "quit"], sentence=True)
    try:
        text = sess.prompt(
            message,
            completer=completer,
            validator=_PeriodValidator(current),
            complete_while_typing=False,
            validate_while_typing=False,
        )
    except (EOFError, KeyboardInterrupt):
        return None
    return resolve_period_input(text, current)


__all__ = ["prompt_period", "resolve_period_input"]
