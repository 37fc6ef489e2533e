"""Greedy settlement minimizer: turn net balances into a short payment plan."""

import logging
from decimal import Decimal

from ..models import Settlement

logger = logging.getLogger(__name__)

DEFAULT_EPSILON = Decimal("0.01")


def minimize_settlements(
    balances: dict[str, Decimal],
    epsilon: Decimal = DEFAULT_EPSILON,
) -> list[Settlement]:
    """
    Greedy largest-debtor-to-largest-creditor debt simplification.

    On every round the debtor who owes the most pays the creditor who is owed
    the most; the payment is whichever of the two amounts is smaller. Anyone
    whose remaining balance drops below ``epsilon`` is settled. Ties are broken
    by the order of ``balances``, so the plan is deterministic.

    For N participants this produces at most N-1 payments. It is the usual
    heuristic and not guaranteed to use the fewest possible payments in every
    case (true minimization is a much harder combinatorial problem).

    Args:
        balances: {name: net_balance}, positive = is owed. Should sum to zero.
        epsilon: Balances with smaller magnitude count as settled

    Returns:
        Ordered list of settlements. Empty when everyone is already settled.
    """
    creditors = {name: amt for name, amt in balances.items() if amt >= epsilon}
    debtors = {name: -amt for name, amt in balances.items() if -amt >= epsilon}

    settlements: list[Settlement] = []

    while creditors and debtors:
        # max() keeps the first of equal candidates, i.e. input order
        debtor = max(debtors, key=lambda name: debtors[name])
        creditor = max(creditors, key=lambda name: creditors[name])

        transfer = min(debtors[debtor], creditors[creditor])
        settlements.append(
            Settlement(debtor=debtor, creditor=creditor, amount=transfer)
        )

        debtors[debtor] -= transfer
        creditors[creditor] -= transfer

        if debtors[debtor] < epsilon:
            del debtors[debtor]
        if creditors[creditor] < epsilon:
            del creditors[creditor]

    if creditors or debtors:
        logger.warning(
            f"Unsettled remainder after {len(settlements)} payments: "
            f"creditors={creditors}, debtors={debtors}"
        )

    return settlements


def apply_settlements(
    balances: dict[str, Decimal], settlements: list[Settlement]
) -> dict[str, Decimal]:
    """Return the balances left after every settlement has been paid."""
    remaining = dict(balances)
    for settlement in settlements:
        remaining[settlement.debtor] += settlement.amount
        remaining[settlement.creditor] -= settlement.amount
    return remaining
