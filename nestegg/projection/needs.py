from nestegg.constants import DEGENERATE_RATE_EPSILON, PERCENT
from nestegg.projection.models import InvalidInputError, RetirementNeed


def gross_up_for_tax(after_tax_income: float, tax_rate_pct: float) -> float:
    """Pre-tax income that leaves `after_tax_income` at a flat tax rate."""
    if not 0 <= tax_rate_pct < PERCENT:
        raise InvalidInputError(f"tax rate must be in [0, 100), got {tax_rate_pct}")
    return after_tax_income / (1 - tax_rate_pct / PERCENT)


def real_return(nominal_return_pct: float, inflation_rate_pct: float) -> float:
    """Inflation-adjusted return in percent (Fisher relation)."""
    return ((1 + nominal_return_pct / PERCENT) / (1 + inflation_rate_pct / PERCENT) - 1) * PERCENT


def retirement_need(
    desired_after_tax_income: float,
    tax_rate_pct: float,
    inflation_rate_pct: float,
    years_to_retirement: int,
    years_in_retirement: int,
    post_retirement_return_pct: float
) -> RetirementNeed:
    """
    Portfolio size at the retirement date that funds an inflation-growing income.

    The income is grossed up for taxes, inflated to the retirement date and then
    valued as a growing annuity: payments grow at inflation `g` and the balance
    earns the post-retirement return `r`.

    Args:
        desired_after_tax_income: Income wanted per year, in today's dollars after tax
        tax_rate_pct: Flat tax rate in retirement (percent, below 100)
        inflation_rate_pct: Annual inflation (percent)
        years_to_retirement: Years until withdrawals begin
        years_in_retirement: Years the income must last
        post_retirement_return_pct: Portfolio return during retirement (percent)

    Returns:
        RetirementNeed evaluated for `inflation_rate_pct`
    """
    if years_to_retirement < 0:
        raise InvalidInputError(f"years_to_retirement must be non-negative, got {years_to_retirement}")
    if years_in_retirement <= 0:
        raise InvalidInputError(f"years_in_retirement must be positive, got {years_in_retirement}")
    if post_retirement_return_pct <= -PERCENT:
        raise InvalidInputError(f"post-retirement return must be above -100%, got {post_retirement_return_pct}")

    pre_tax_income = gross_up_for_tax(desired_after_tax_income, tax_rate_pct)

    g = inflation_rate_pct / PERCENT
    r = post_retirement_return_pct / PERCENT
    income_at_retirement = pre_tax_income * (1 + g) ** years_to_retirement

    if abs(r - g) < DEGENERATE_RATE_EPSILON:
        # Payments grow as fast as the balance earns
        portfolio_needed = income_at_retirement * years_in_retirement
    else:
        portfolio_needed = income_at_retirement * (1 - ((1 + g) / (1 + r)) ** years_in_retirement) / (r - g)

    return RetirementNeed(
        pre_tax_income=pre_tax_income,
        income_at_retirement=income_at_retirement,
        portfolio_needed=max(0.0, portfolio_needed),
        inflation_rate=inflation_rate_pct,
    )
