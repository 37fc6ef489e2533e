"""Interactive UI components for entering participants and expenses."""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document
from pydantic import ValidationError

from ..models import Expense, SplitRequest

logger = logging.getLogger(__name__)


class ParticipantCompleter(Completer):
    """Fuzzy search completer for participant names.

    Completes the text after the last comma, so it also works for
    comma-separated "split between" lists.
    """

    def __init__(self, participants: list[str]):
        """Initialize the completer with the known participants."""
        self.participants = participants

    def get_completions(self, document: Document, complete_event: Any):
        """Get fuzzy-matched completions for the current name."""
        current = document.text_before_cursor.rsplit(",", 1)[-1]
        query = current.strip().lower()

        for name in self.participants:
            if not query or self._fuzzy_match(query, name.lower()):
                yield Completion(
                    text=name,
                    start_position=-len(current.lstrip()),
                    display=name,
                )

    def _fuzzy_match(self, query: str, text: str) -> bool:
        """
        Fuzzy match: all characters in query must appear in order in text.

        Example:
            query="al" matches "Alice"
            query="crl" matches "Carol"
        """
        query_idx = 0
        for char in text:
            if query_idx < len(query) and char == query[query_idx]:
                query_idx += 1
        return query_idx == len(query)


def parse_amount(text: str) -> Decimal | None:
    """Parse a user-typed amount like ``$1,234.50``; None if not a positive number."""
    cleaned = text.strip().replace("$", "").replace(",", "")
    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        return None
    if not amount.is_finite() or amount <= 0:
        return None
    return amount


def parse_split_between(text: str, participants: list[str]) -> list[str]:
    """
    Parse a comma-separated list of names. An empty answer means everyone.

    Matching is case-insensitive; names are returned as the participant
    spelled them. Unknown names are returned unchanged so validation can
    report them.
    """
    if not text.strip():
        return list(participants)

    by_lower = {name.lower(): name for name in participants}
    names = []
    for raw in text.split(","):
        raw = raw.strip()
        if raw:
            names.append(by_lower.get(raw.lower(), raw))
    return names


def prompt_participants(session: PromptSession | None = None) -> list[str]:
    """
    Ask for participant names, one per line, until a blank line.

    Duplicate names are refused at the prompt.
    """
    session = session or PromptSession()
    participants: list[str] = []

    print("\n👥 Participants (blank line to finish)")
    while True:
        name = session.prompt(f"Person {len(participants) + 1}: ").strip()
        if not name:
            if participants:
                return participants
            print("❌ Add at least one participant.")
            continue
        if name in participants:
            print(f"❌ '{name}' is already listed. Names must be unique.")
            continue
        participants.append(name)


def prompt_expense(
    participants: list[str], number: int, session: PromptSession | None = None
) -> Expense | None:
    """
    Ask for one expense. A blank expense name ends entry (returns None).

    Re-prompts for any field that fails validation.
    """
    completer = ParticipantCompleter(participants)
    session = session or PromptSession(completer=completer)

    print(f"\n🧾 Expense #{number} (blank name to finish)")
    name = session.prompt("Name: ").strip()
    if not name:
        return None

    while True:
        amount = parse_amount(session.prompt("Amount: "))
        if amount is not None:
            break
        print("❌ Amount must be a positive number.")

    while True:
        paid_by = session.prompt(
            "Paid by: ", completer=completer, complete_while_typing=True
        ).strip()
        match = parse_split_between(paid_by, participants) if paid_by else []
        if len(match) == 1 and match[0] in participants:
            paid_by = match[0]
            break
        print("❌ Payer must be one of the participants.")

    while True:
        split_text = session.prompt(
            "Split between (comma-separated, blank = everyone): ",
            completer=completer,
            complete_while_typing=True,
        )
        split_between = parse_split_between(split_text, participants)
        unknown = [n for n in split_between if n not in participants]
        if unknown:
            print(f"❌ Not a participant: {', '.join(unknown)}")
            continue
        try:
            return Expense(
                name=name, amount=amount, paid_by=paid_by, split_between=split_between
            )
        except ValidationError as e:
            print(f"❌ {e.errors()[0]['msg']}")


def collect_split_request() -> SplitRequest | None:
    """
    Interactive entry of a whole split request.

    Returns:
        The request, or None if the user cancelled with Ctrl+C / Ctrl+D
    """
    try:
        participants = prompt_participants()
        expenses: list[Expense] = []
        while True:
            expense = prompt_expense(participants, len(expenses) + 1)
            if expense is None:
                break
            expenses.append(expense)
            logger.info(f"Added expense: {expense.name} ({expense.amount})")
        return SplitRequest(participants=participants, expenses=expenses)
    except (KeyboardInterrupt, EOFError):
        print("\n⏭️  Cancelled")
        return None
