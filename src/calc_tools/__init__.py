"""calc-tools - group expense splitting and everyday calculators."""

__version__ = "0.1.0"

from .config import Settings, load_settings
from .models import Expense, Settlement, SplitRequest, SplitResult
from .money import to_cents
from .split.balances import compute_balances, reconcile_to_cents
from .split.service import SplitService, load_split_request
from .split.settlement import apply_settlements, minimize_settlements

__all__ = [
    "Settings",
    "load_settings",
    "Expense",
    "Settlement",
    "SplitRequest",
    "SplitResult",
    "to_cents",
    "compute_balances",
    "reconcile_to_cents",
    "SplitService",
    "load_split_request",
    "apply_settlements",
    "minimize_settlements",
]
