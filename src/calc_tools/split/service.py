"""Service layer that composes validation, balances and settlement.

Everything here is pure: nothing is persisted between calls, and every
request recomputes balances from scratch.
"""

import logging
from pathlib import Path

from pydantic import ValidationError

from ..config import Settings
from ..exceptions import InvalidInputError
from ..models import Expense, SplitRequest, SplitResult
from ..validation import field_errors
from .balances import compute_balances
from .settlement import minimize_settlements

logger = logging.getLogger(__name__)


def load_split_request(path: Path) -> SplitRequest:
    """
    Load a split request from a JSON file.

    Expected shape::

        {"participants": ["Alice", "Bob"],
         "expenses": [{"name": "Dinner", "amount": "90.00",
                       "paid_by": "Alice", "split_between": ["Alice", "Bob"]}]}

    Raises:
        InvalidInputError: If the document does not match the expected shape
    """
    try:
        return SplitRequest.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError as e:
        raise InvalidInputError(field_errors(e)) from e


class SplitService:
    """Service for splitting shared expenses and planning settle-up payments."""

    def __init__(self, settings: Settings):
        """Initialize the split service."""
        self.settings = settings

    def calculate(self, participants: list[str], expenses: list[Expense]) -> SplitResult:
        """
        Compute balances and the payment plan for one group.

        Args:
            participants: Participant names, in display order
            expenses: Shared expenses

        Returns:
            SplitResult with cent-exact balances and the settlements

        Raises:
            InvalidInputError: If any expense refers to an unknown participant
                               or a participant is listed twice
        """
        balances = compute_balances(participants, expenses)
        settlements = minimize_settlements(
            balances, epsilon=self.settings.settlement_epsilon
        )

        logger.info(
            f"Split {len(expenses)} expenses among {len(participants)} participants: "
            f"{len(settlements)} settlements"
        )

        return SplitResult(balances=balances, settlements=settlements)

    def calculate_request(self, request: SplitRequest) -> SplitResult:
        """Compute a SplitResult from a parsed request document."""
        return self.calculate(request.participants, request.expenses)
