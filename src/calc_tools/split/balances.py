"""Core balance logic: who paid what, who owes what, rounded to cents exactly once."""

import logging
from decimal import Decimal

from ..exceptions import (
    DuplicateParticipantError,
    InvalidInputError,
    RoundingError,
    UnknownParticipantError,
)
from ..models import Expense
from ..money import CENT, to_cents

logger = logging.getLogger(__name__)


def validate_participants(participants: list[str], expenses: list[Expense]) -> list[str]:
    """
    Check every name an expense refers to against the participant list.

    Participant names are stripped the same way expense names are. The whole
    request is rejected on the first problem; no expense is skipped.

    Returns:
        The stripped participant names, in input order

    Raises:
        InvalidInputError: If a participant name is blank
        DuplicateParticipantError: If a participant name is listed twice
        UnknownParticipantError: If ``paid_by`` or a ``split_between`` name
                                 is not a participant
    """
    names = [name.strip() for name in participants]
    known: set[str] = set()
    for idx, name in enumerate(names):
        if not name:
            raise InvalidInputError({f"participants.{idx}": "Name must not be blank"})
        if name in known:
            raise DuplicateParticipantError(name)
        known.add(name)

    for idx, expense in enumerate(expenses):
        if expense.paid_by not in known:
            raise UnknownParticipantError(f"expenses.{idx}.paid_by", expense.paid_by)
        for name in expense.split_between:
            if name not in known:
                raise UnknownParticipantError(f"expenses.{idx}.split_between", name)

    return names


def compute_exact_balances(
    participants: list[str], expenses: list[Expense]
) -> dict[str, Decimal]:
    """
    Compute each participant's unrounded net balance.

    balance(p) = sum of amounts p paid
               - sum of amount / len(split_between) for expenses p shares

    Args:
        participants: Participant names, in display order
        expenses: Validated expenses

    Returns:
        {name: balance} in participant order, every participant present
    """
    names = validate_participants(participants, expenses)

    balances = {name: Decimal("0") for name in names}
    for expense in expenses:
        balances[expense.paid_by] += expense.amount
        share = expense.amount / len(expense.split_between)
        for name in expense.split_between:
            balances[name] -= share

    return balances


def reconcile_to_cents(exact: dict[str, Decimal]) -> dict[str, Decimal]:
    """
    Round balances to cents so that they still sum to exactly zero.

    Steps:
    1. Round each balance independently (ROUND_HALF_UP)
    2. Compute residual = 0 - sum(rounded)
    3. If residual exceeds one cent per participant, raise
    4. Hand the residual out one cent at a time, each cent going to the balance
       whose rounding moved it furthest in the opposite direction
       (ties: largest absolute balance, then input order)

    Example: 100 paid by Alice, split three ways gives
    66.67 / -33.33 / -33.33 after step 1; Alice absorbs the stray cent
    and ends at 66.66.

    Raises:
        RoundingError: If the residual exceeds the safety threshold
    """
    rounded = {name: to_cents(amount) for name, amount in exact.items()}

    residual = -sum(rounded.values(), Decimal("0"))
    residual_cents = int(residual / CENT)

    threshold = max(len(rounded), 1)
    if abs(residual_cents) > threshold:
        raise RoundingError(
            f"Balance rounding residual exceeds safety threshold:\n"
            f"  Residual:  {residual}\n"
            f"  Threshold: {threshold} cents\n"
            f"Balances do not sum to zero; this indicates a data integrity issue."
        )

    if residual_cents:
        step = CENT if residual_cents > 0 else -CENT
        for _ in range(abs(residual_cents)):
            # Candidate whose rounded value overshot most against the step direction
            target = max(
                rounded,
                key=lambda name: (
                    (exact[name] - rounded[name]) * (1 if step > 0 else -1),
                    abs(exact[name]),
                ),
            )
            rounded[target] += step
            logger.info(f"Applied rounding adjustment: {step} to {target}")

    assert sum(rounded.values(), Decimal("0")) == 0, "Reconciliation failed"

    return rounded


def compute_balances(
    participants: list[str], expenses: list[Expense]
) -> dict[str, Decimal]:
    """Net balances per participant, in cents, summing to exactly zero."""
    return reconcile_to_cents(compute_exact_balances(participants, expenses))
