from nestegg.constants import PERCENT
from nestegg.projection.models import InvalidInputError


def future_value(
    initial: float,
    annual_contribution: float,
    annual_rate_pct: float,
    years: int
) -> float:
    """
    Future value of a lump sum plus level end-of-year contributions.

    FV = initial * (1+r)^n + contribution * ((1+r)^n - 1) / r

    Args:
        initial: Amount invested today
        annual_contribution: Contribution added at the end of each year
        annual_rate_pct: Annual return in percent (9.6 = 9.6%)
        years: Number of compounding years

    Returns:
        Portfolio value after `years` years
    """
    if years < 0:
        raise InvalidInputError(f"years must be non-negative, got {years}")

    r = annual_rate_pct / PERCENT
    growth = (1 + r) ** years
    fv_initial = initial * growth

    if annual_contribution == 0:
        return fv_initial
    if r == 0:
        # Limit of the annuity factor as r -> 0
        return fv_initial + annual_contribution * years
    return fv_initial + annual_contribution * (growth - 1) / r
