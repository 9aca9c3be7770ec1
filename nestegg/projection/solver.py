import math
from typing import Tuple

from loguru import logger

from nestegg.constants import (
    PERCENT,
    SOLVER_INITIAL_GUESS,
    SOLVER_MAX_ITERATIONS,
    SOLVER_TOLERANCE,
)
from nestegg.projection.growth import future_value
from nestegg.projection.models import InvalidInputError, RequiredReturn


def _future_value_and_slope(
    initial: float,
    annual_contribution: float,
    rate: float,
    years: int
) -> Tuple[float, float]:
    """FV(r) and dFV/dr for a fractional rate."""
    if rate == 0:
        fv = initial + annual_contribution * years
        slope = initial * years + annual_contribution * years * (years - 1) / 2
        return fv, slope

    growth = (1 + rate) ** years
    growth_prev = (1 + rate) ** (years - 1)
    fv = initial * growth + annual_contribution * (growth - 1) / rate
    slope = (
        initial * years * growth_prev
        + annual_contribution * (years * growth_prev * rate - (growth - 1)) / (rate * rate)
    )
    return fv, slope


def required_return(
    initial: float,
    annual_contribution: float,
    target_future_value: float,
    years: int
) -> RequiredReturn:
    """
    Constant annual return that grows `initial` plus level contributions to a target.

    Without contributions the rate has a closed form. With contributions the
    future value is transcendental in r, so Newton-Raphson is run from 8% for at
    most 50 iterations, stopping once successive iterates agree within 1e-4.

    Returns:
        RequiredReturn with the rate in percent. `converged` is False when the
        iteration cap was hit, the slope vanished, an iterate left the domain,
        or (without contributions) there is nothing to compound.
    """
    if years <= 0:
        raise InvalidInputError(f"years must be positive, got {years}")
    if initial < 0 or annual_contribution < 0 or target_future_value < 0:
        raise InvalidInputError("initial, annual_contribution and target_future_value must be non-negative")

    if annual_contribution == 0:
        if initial <= 0:
            logger.warning("No required return exists: nothing invested and no contributions")
            return RequiredReturn(rate=math.nan, converged=False)
        rate = (target_future_value / initial) ** (1 / years) - 1
        return RequiredReturn(rate=rate * PERCENT, converged=True)

    rate = SOLVER_INITIAL_GUESS
    for iteration in range(1, SOLVER_MAX_ITERATIONS + 1):
        try:
            fv, slope = _future_value_and_slope(initial, annual_contribution, rate, years)
        except OverflowError:
            logger.warning(f"Required return solver overflowed at {rate * PERCENT:.4f}% (iteration {iteration})")
            return RequiredReturn(rate=rate * PERCENT, converged=False, iterations=iteration)
        if slope == 0 or not math.isfinite(slope):
            logger.warning(f"Required return solver stalled at {rate * PERCENT:.4f}% (iteration {iteration})")
            return RequiredReturn(rate=rate * PERCENT, converged=False, iterations=iteration)

        new_rate = rate - (fv - target_future_value) / slope
        if not math.isfinite(new_rate) or new_rate <= -1:
            logger.warning(f"Required return solver diverged after {iteration} iterations")
            return RequiredReturn(rate=new_rate * PERCENT, converged=False, iterations=iteration)

        if abs(new_rate - rate) < SOLVER_TOLERANCE:
            return RequiredReturn(rate=new_rate * PERCENT, converged=True, iterations=iteration)
        rate = new_rate

    logger.warning(
        f"Required return solver did not converge in {SOLVER_MAX_ITERATIONS} iterations "
        f"(last iterate {rate * PERCENT:.4f}%)"
    )
    return RequiredReturn(rate=rate * PERCENT, converged=False, iterations=SOLVER_MAX_ITERATIONS)


def additional_annual_contribution(gap: float, annual_rate_pct: float, years: int) -> float:
    """Extra level yearly contribution whose future value covers `gap`."""
    if gap <= 0:
        return 0.0
    if years <= 0:
        raise InvalidInputError(f"years must be positive, got {years}")
    per_unit = future_value(0, 1, annual_rate_pct, years)
    if per_unit <= 0:
        return math.inf
    return gap / per_unit
