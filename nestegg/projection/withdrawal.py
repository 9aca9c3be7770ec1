import math
from itertools import islice
from typing import Iterator, Tuple

from nestegg.constants import LONGEVITY_CEILING_YEARS, PERCENT, SAMPLE_INTERVAL_YEARS
from nestegg.projection.models import InvalidInputError, WithdrawalPoint


def _check_amounts(starting_portfolio: float, first_year_withdrawal: float) -> None:
    if starting_portfolio < 0:
        raise InvalidInputError(f"starting_portfolio must be non-negative, got {starting_portfolio}")
    if first_year_withdrawal < 0:
        raise InvalidInputError(f"first_year_withdrawal must be non-negative, got {first_year_withdrawal}")


def _retirement_years(
    starting_portfolio: float,
    first_year_withdrawal: float,
    inflation_rate_pct: float,
    return_rate_pct: float
) -> Iterator[WithdrawalPoint]:
    """
    Yields one point per retirement year, starting at year 1.

    Each year the withdrawal is taken at the start, the remainder earns the
    return, and the next withdrawal grows with inflation. Stops after the
    first depleted year.
    """
    growth = 1 + return_rate_pct / PERCENT
    inflation = 1 + inflation_rate_pct / PERCENT
    balance = starting_portfolio
    withdrawal = first_year_withdrawal
    year = 0

    while True:
        year += 1
        balance -= withdrawal
        if balance <= 0:
            yield WithdrawalPoint(year=year, withdrawal_amount=withdrawal, balance=0.0, depleted=True)
            return
        balance *= growth
        yield WithdrawalPoint(year=year, withdrawal_amount=withdrawal, balance=balance)
        withdrawal *= inflation


def simulate_withdrawals(
    starting_portfolio: float,
    first_year_withdrawal: float,
    inflation_rate_pct: float,
    return_rate_pct: float,
    total_years: int
) -> Tuple[WithdrawalPoint, ...]:
    """
    Year-by-year retirement trajectory, sampled every 5 years.

    Year 0 is the starting state (full balance, first withdrawal not yet taken).
    After that only multiples of 5 are kept, plus the final year: either
    `total_years` or the year the portfolio is depleted, whichever is first.
    A depleted point has a zero balance and ends the trajectory.

    Returns:
        Tuple of WithdrawalPoint in chronological order
    """
    if total_years <= 0:
        raise InvalidInputError(f"total_years must be positive, got {total_years}")
    _check_amounts(starting_portfolio, first_year_withdrawal)

    if starting_portfolio == 0:
        return (WithdrawalPoint(year=0, withdrawal_amount=first_year_withdrawal, balance=0.0, depleted=True),)

    points = [WithdrawalPoint(year=0, withdrawal_amount=first_year_withdrawal, balance=starting_portfolio)]
    years = _retirement_years(starting_portfolio, first_year_withdrawal, inflation_rate_pct, return_rate_pct)
    for point in islice(years, total_years):
        if point.depleted or point.year % SAMPLE_INTERVAL_YEARS == 0 or point.year == total_years:
            points.append(point)
    return tuple(points)


def portfolio_longevity(
    starting_portfolio: float,
    first_year_withdrawal: float,
    inflation_rate_pct: float,
    return_rate_pct: float
) -> int:
    """
    Full years the portfolio sustains an inflation-growing withdrawal.

    Capped at 200 years; a result at the cap means the portfolio sustains
    itself indefinitely under these assumptions.
    """
    _check_amounts(starting_portfolio, first_year_withdrawal)
    if starting_portfolio == 0:
        return 0

    survived = 0
    years = _retirement_years(starting_portfolio, first_year_withdrawal, inflation_rate_pct, return_rate_pct)
    for point in islice(years, LONGEVITY_CEILING_YEARS):
        if point.depleted:
            break
        survived += 1
    return survived


def withdrawal_rate(portfolio_value: float, first_year_withdrawal: float) -> float:
    """Initial withdrawal rate in percent."""
    if portfolio_value <= 0:
        return math.inf if first_year_withdrawal > 0 else 0.0
    return first_year_withdrawal / portfolio_value * PERCENT
