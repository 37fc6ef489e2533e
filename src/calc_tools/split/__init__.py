"""Group expense splitting and settle-up planning."""

from .balances import compute_balances, compute_exact_balances, reconcile_to_cents
from .service import SplitService, load_split_request
from .settlement import apply_settlements, minimize_settlements

__all__ = [
    "compute_balances",
    "compute_exact_balances",
    "reconcile_to_cents",
    "SplitService",
    "load_split_request",
    "apply_settlements",
    "minimize_settlements",
]
