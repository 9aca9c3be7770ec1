from dataclasses import dataclass


class InvalidInputError(ValueError):
    """Raised when an engine function receives an input outside its domain."""


@dataclass(frozen=True)
class RetirementNeed:
    """Portfolio required at retirement for one inflation assumption."""
    pre_tax_income: float
    income_at_retirement: float  # First-year pre-tax income, in retirement-date dollars
    portfolio_needed: float
    inflation_rate: float  # Percent


@dataclass(frozen=True)
class RequiredReturn:
    """Outcome of the return solver. `rate` is NaN when no rate exists."""
    rate: float  # Percent
    converged: bool
    iterations: int = 0


@dataclass(frozen=True)
class GapAnalysis:
    """Compares the projected portfolio with what one scenario needs."""
    projected_value: float
    gap: float  # Positive = shortfall, negative = surplus
    required_return: RequiredReturn
    additional_annual_contribution: float

    @property
    def has_shortfall(self) -> bool:
        return self.gap > 0


@dataclass(frozen=True)
class WithdrawalPoint:
    """One sampled year of a retirement trajectory."""
    year: int  # 0 = retirement start
    withdrawal_amount: float
    balance: float
    depleted: bool = False
