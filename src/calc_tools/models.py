"""Pydantic domain models for the group expense splitter."""

from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

# ============================================================================
# Input Models
# ============================================================================


class Expense(BaseModel):
    """A shared expense, split evenly among ``split_between``."""

    name: str = Field(min_length=1)
    amount: Decimal = Field(gt=0)
    paid_by: str = Field(min_length=1)
    split_between: list[str] = Field(min_length=1)

    @field_validator("name", "paid_by")
    @classmethod
    def _strip_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("split_between")
    @classmethod
    def _check_split_names(cls, names: list[str]) -> list[str]:
        names = [name.strip() for name in names]
        if any(not name for name in names):
            raise ValueError("names must not be blank")
        seen: set[str] = set()
        for name in names:
            if name in seen:
                raise ValueError(f"'{name}' appears more than once")
            seen.add(name)
        return names


class SplitRequest(BaseModel):
    """Participants plus the expenses they shared."""

    participants: list[str] = Field(default_factory=list)
    expenses: list[Expense] = Field(default_factory=list)

    @field_validator("participants")
    @classmethod
    def _strip_participants(cls, names: list[str]) -> list[str]:
        names = [name.strip() for name in names]
        if any(not name for name in names):
            raise ValueError("participant names must not be blank")
        return names


# ============================================================================
# Result Models
# ============================================================================


class Settlement(BaseModel):
    """A single directed payment from a debtor to a creditor."""

    debtor: str
    creditor: str
    amount: Decimal = Field(gt=0)

    def describe(self, currency_symbol: str = "$") -> str:
        """Human-readable form, e.g. ``Bob pays Alice $30.00``."""
        return f"{self.debtor} pays {self.creditor} {currency_symbol}{self.amount:,.2f}"


class SplitResult(BaseModel):
    """Net balances (in participant order) and the payment plan that clears them.

    Balances are quantized to cents and sum to exactly zero.
    Positive = is owed money, negative = owes money.
    """

    balances: dict[str, Decimal]
    settlements: list[Settlement] = Field(default_factory=list)

    @property
    def is_settled(self) -> bool:
        """True when nobody owes anybody anything."""
        return not self.settlements
