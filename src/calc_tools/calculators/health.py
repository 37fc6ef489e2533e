"""Financial health score: four 25-point sub-scores summed to a 0-100 score."""

from typing import Literal

from pydantic import BaseModel, Field

from ..validation import CalculatorInput, validate_input

Status = Literal["Excellent", "Good", "Fair", "Needs Improvement"]

# Share of non-housing, non-savings income assumed to be spent each month
DISCRETIONARY_SPEND_RATIO = 0.7


class FinancialHealthInput(CalculatorInput):
    monthly_income: float = Field(gt=0)
    monthly_savings: float = Field(ge=0)
    total_debt: float = Field(ge=0)  # excluding mortgage
    liquid_assets: float = Field(ge=0)
    monthly_housing_cost: float = Field(ge=0)


class ScoreComponent(BaseModel):
    subject: str
    score: int
    full_mark: int = 25


class FinancialHealthResult(BaseModel):
    total_score: int
    savings_score: int
    debt_score: int
    emergency_fund_score: int
    housing_score: int
    status: Status
    savings_rate: float
    debt_to_income_ratio: float
    emergency_fund_months: float
    housing_cost_ratio: float

    @property
    def components(self) -> list[ScoreComponent]:
        """Sub-scores in display order."""
        return [
            ScoreComponent(subject="Savings", score=self.savings_score),
            ScoreComponent(subject="Debt", score=self.debt_score),
            ScoreComponent(subject="Emergency Fund", score=self.emergency_fund_score),
            ScoreComponent(subject="Housing", score=self.housing_score),
        ]


def _tiered(value: float, tiers: list[tuple[float, int]], at_least: bool) -> int:
    """First tier whose bound ``value`` meets; 5 points otherwise."""
    for bound, points in tiers:
        if (value >= bound) if at_least else (value < bound):
            return points
    return 5


def _savings_score(savings_rate: float) -> int:
    return _tiered(savings_rate, [(0.2, 25), (0.15, 20), (0.1, 15), (0.05, 10)], True)


def _debt_score(debt_to_income: float) -> int:
    return _tiered(debt_to_income, [(0.5, 25), (1, 20), (1.5, 15), (2, 10)], False)


def _emergency_fund_score(months: float) -> int:
    return _tiered(months, [(6, 25), (4, 20), (3, 15), (1, 10)], True)


def _housing_score(housing_ratio: float) -> int:
    # Upper bounds are inclusive here, unlike the debt ratio
    for bound, points in [(0.28, 25), (0.33, 20), (0.4, 15), (0.5, 10)]:
        if housing_ratio <= bound:
            return points
    return 5


def _status(total: int) -> Status:
    if total >= 85:
        return "Excellent"
    if total >= 70:
        return "Good"
    if total >= 50:
        return "Fair"
    return "Needs Improvement"


def financial_health_score(
    monthly_income: float,
    monthly_savings: float,
    total_debt: float,
    liquid_assets: float,
    monthly_housing_cost: float,
) -> FinancialHealthResult:
    """
    Score savings, debt, emergency fund and housing cost, 5-25 points each.

    - Savings rate       = monthly savings / monthly income
    - Debt-to-income     = total debt / (monthly income * 12)
    - Emergency months   = liquid assets / estimated monthly expenses, where
      expenses = housing + 0.7 * (income - savings - housing)
    - Housing cost ratio = housing / monthly income
    """
    data = validate_input(
        FinancialHealthInput,
        monthly_income=monthly_income,
        monthly_savings=monthly_savings,
        total_debt=total_debt,
        liquid_assets=liquid_assets,
        monthly_housing_cost=monthly_housing_cost,
    )
    annual_income = data.monthly_income * 12

    savings_rate = data.monthly_savings / data.monthly_income
    debt_to_income = data.total_debt / annual_income

    monthly_expenses = data.monthly_housing_cost + (
        data.monthly_income - data.monthly_savings - data.monthly_housing_cost
    ) * DISCRETIONARY_SPEND_RATIO
    emergency_months = (
        data.liquid_assets / monthly_expenses if monthly_expenses > 0 else 0.0
    )

    housing_ratio = data.monthly_housing_cost / data.monthly_income

    savings = _savings_score(savings_rate)
    debt = _debt_score(debt_to_income)
    emergency = _emergency_fund_score(emergency_months)
    housing = _housing_score(housing_ratio)
    total = savings + debt + emergency + housing

    return FinancialHealthResult(
        total_score=total,
        savings_score=savings,
        debt_score=debt,
        emergency_fund_score=emergency,
        housing_score=housing,
        status=_status(total),
        savings_rate=savings_rate,
        debt_to_income_ratio=debt_to_income,
        emergency_fund_months=emergency_months,
        housing_cost_ratio=housing_ratio,
    )
