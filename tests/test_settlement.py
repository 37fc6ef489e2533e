"""Tests for the greedy settlement minimizer."""

import random
from decimal import Decimal

import pytest

from calc_tools.models import Expense, Settlement
from calc_tools.split.service import SplitService
from calc_tools.split.settlement import apply_settlements, minimize_settlements


def as_tuples(settlements: list[Settlement]) -> list[tuple[str, str, Decimal]]:
    return [(s.debtor, s.creditor, s.amount) for s in settlements]


class TestMinimizeSettlements:
    """Largest debtor pays largest creditor until everyone is settled."""

    def test_one_creditor_two_debtors(self):
        balances = {
            "Alice": Decimal("60.00"),
            "Bob": Decimal("-30.00"),
            "Carol": Decimal("-30.00"),
        }

        settlements = minimize_settlements(balances)

        assert as_tuples(settlements) == [
            ("Bob", "Alice", Decimal("30.00")),
            ("Carol", "Alice", Decimal("30.00")),
        ]

    def test_zero_balance_participant_is_ignored(self):
        balances = {
            "Alice": Decimal("-50.00"),
            "Bob": Decimal("50.00"),
            "Carol": Decimal("0.00"),
        }

        settlements = minimize_settlements(balances)

        assert as_tuples(settlements) == [("Alice", "Bob", Decimal("50.00"))]

    def test_largest_amounts_are_matched_first(self):
        balances = {
            "A": Decimal("50"),
            "B": Decimal("30"),
            "C": Decimal("-40"),
            "D": Decimal("-40"),
        }

        settlements = minimize_settlements(balances)

        assert as_tuples(settlements) == [
            ("C", "A", Decimal("40")),
            ("D", "B", Decimal("30")),
            ("D", "A", Decimal("10")),
        ]

    def test_ties_follow_input_order(self):
        balances = {"A": Decimal("-10"), "B": Decimal("-10"), "C": Decimal("20")}

        settlements = minimize_settlements(balances)

        assert settlements[0].debtor == "A"
        assert settlements[1].debtor == "B"

    def test_empty_balances(self):
        assert minimize_settlements({}) == []

    def test_everyone_settled(self):
        balances = {"A": Decimal("0"), "B": Decimal("0")}

        assert minimize_settlements(balances) == []

    def test_amounts_below_epsilon_are_settled(self):
        balances = {"A": Decimal("0.005"), "B": Decimal("-0.005")}

        assert minimize_settlements(balances) == []

    def test_custom_epsilon(self):
        balances = {"A": Decimal("0.50"), "B": Decimal("-0.50")}

        assert minimize_settlements(balances, epsilon=Decimal("1.00")) == []
        assert len(minimize_settlements(balances, epsilon=Decimal("0.50"))) == 1

    def test_unbalanced_input_logs_a_warning(self, caplog):
        balances = {"A": Decimal("10"), "B": Decimal("-4")}

        with caplog.at_level("WARNING"):
            settlements = minimize_settlements(balances)

        assert as_tuples(settlements) == [("B", "A", Decimal("4"))]
        assert "Unsettled remainder" in caplog.text


class TestSettlementCorrectness:
    """Applying the plan leaves every balance at zero."""

    @pytest.mark.parametrize(
        "balances",
        [
            {"A": Decimal("66.66"), "B": Decimal("-33.33"), "C": Decimal("-33.33")},
            {"A": Decimal("10"), "B": Decimal("20"), "C": Decimal("-5"), "D": Decimal("-25")},
            {
                "A": Decimal("-12.34"),
                "B": Decimal("56.78"),
                "C": Decimal("-0.01"),
                "D": Decimal("-44.43"),
                "E": Decimal("0"),
            },
        ],
    )
    def test_plan_zeroes_balances(self, balances):
        settlements = minimize_settlements(balances)

        remaining = apply_settlements(balances, settlements)

        assert all(amount == 0 for amount in remaining.values())
        assert len(settlements) <= len(balances) - 1

    def test_every_payment_is_positive(self):
        balances = {"A": Decimal("1.01"), "B": Decimal("-0.01"), "C": Decimal("-1.00")}

        settlements = minimize_settlements(balances)

        assert all(s.amount > 0 for s in settlements)
        assert all(s.debtor != s.creditor for s in settlements)

    def test_apply_does_not_mutate_input(self):
        balances = {"A": Decimal("5"), "B": Decimal("-5")}
        settlements = minimize_settlements(balances)

        apply_settlements(balances, settlements)

        assert balances == {"A": Decimal("5"), "B": Decimal("-5")}


class TestSettlementModel:
    def test_describe(self):
        settlement = Settlement(debtor="Bob", creditor="Alice", amount=Decimal("30"))

        assert settlement.describe() == "Bob pays Alice $30.00"
        assert settlement.describe("€") == "Bob pays Alice €30.00"

    def test_amount_must_be_positive(self):
        with pytest.raises(ValueError):
            Settlement(debtor="Bob", creditor="Alice", amount=Decimal("0"))


class TestRandomGroups:
    """Seeded random groups, run through the whole service."""

    @staticmethod
    def random_group(rng: random.Random) -> tuple[list[str], list[Expense]]:
        participants = [f"P{i}" for i in range(rng.randint(2, 8))]
        expenses = [
            Expense(
                name=f"Expense {i}",
                amount=Decimal(rng.randint(1, 50_000)) / 100,
                paid_by=rng.choice(participants),
                split_between=rng.sample(participants, rng.randint(1, len(participants))),
            )
            for i in range(rng.randint(0, 12))
        ]
        return participants, expenses

    @pytest.mark.parametrize("seed", range(25))
    def test_plan_settles_everyone(self, settings, seed):
        rng = random.Random(seed)
        participants, expenses = self.random_group(rng)

        result = SplitService(settings).calculate(participants, expenses)
        remaining = apply_settlements(result.balances, result.settlements)

        assert sum(result.balances.values(), Decimal("0")) == 0
        assert all(amount == 0 for amount in remaining.values())
        assert len(result.settlements) <= len(participants) - 1
