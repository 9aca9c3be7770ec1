from dataclasses import dataclass
from typing import Dict, Tuple

from loguru import logger

from nestegg.config import ProjectionInput
from nestegg.constants import CONSERVATIVE_INFLATION, LONGEVITY_CEILING_YEARS, OPTIMISTIC_INFLATION
from nestegg.projection import (
    GapAnalysis,
    RetirementNeed,
    WithdrawalPoint,
    additional_annual_contribution,
    future_value,
    portfolio_longevity,
    real_return,
    required_return,
    retirement_need,
    simulate_withdrawals,
    withdrawal_rate,
)

# Scenario name -> inflation override (None = use the input's rate)
SCENARIOS = {
    "conservative": CONSERVATIVE_INFLATION,
    "base": None,
    "optimistic": OPTIMISTIC_INFLATION,
}
GAP_SCENARIOS = ("base", "conservative")


@dataclass(frozen=True)
class ProjectionResults:
    """Everything the presentation layer shows for one set of inputs."""
    inputs: ProjectionInput
    needs: Dict[str, RetirementNeed]
    projected_value: float
    gaps: Dict[str, GapAnalysis]
    withdrawal_schedule: Tuple[WithdrawalPoint, ...]
    withdrawal_rate: float
    portfolio_longevity: int
    real_return: float
    break_even_return: float
    total_contributions: float

    @property
    def base_need(self) -> RetirementNeed:
        return self.needs["base"]

    @property
    def base_gap(self) -> GapAnalysis:
        return self.gaps["base"]

    @property
    def on_track(self) -> bool:
        return self.base_gap.gap <= 0

    @property
    def compounding_growth(self) -> float:
        """Portion of the projected value earned by returns rather than contributed."""
        return self.projected_value - self.total_contributions

    @property
    def sustains_indefinitely(self) -> bool:
        return self.portfolio_longevity >= LONGEVITY_CEILING_YEARS

    @property
    def outlasts_life_expectancy(self) -> bool:
        return self.portfolio_longevity > self.inputs.years_in_retirement

    @property
    def depleted_during_retirement(self) -> bool:
        return any(point.depleted for point in self.withdrawal_schedule)


def _gap_analysis(inputs: ProjectionInput, projected_value: float, need: RetirementNeed) -> GapAnalysis:
    gap = need.portfolio_needed - projected_value
    return GapAnalysis(
        projected_value=projected_value,
        gap=gap,
        required_return=required_return(
            inputs.initial_investment,
            inputs.annual_contribution,
            need.portfolio_needed,
            inputs.years_to_retirement,
        ),
        additional_annual_contribution=additional_annual_contribution(
            gap, inputs.pre_retirement_return, inputs.years_to_retirement
        ),
    )


def recompute(inputs: ProjectionInput) -> ProjectionResults:
    """
    Runs every component for one set of inputs.

    Needs are evaluated for the conservative, base and optimistic inflation
    scenarios; gaps are analysed for base and conservative. The retirement
    trajectory starts from the projected (not the required) portfolio.
    """
    needs = {}
    for name, inflation_override in SCENARIOS.items():
        inflation = inputs.inflation_rate if inflation_override is None else inflation_override
        needs[name] = retirement_need(
            inputs.desired_annual_income,
            inputs.tax_rate,
            inflation,
            inputs.years_to_retirement,
            inputs.years_in_retirement,
            inputs.post_retirement_return,
        )

    projected_value = future_value(
        inputs.initial_investment,
        inputs.annual_contribution,
        inputs.pre_retirement_return,
        inputs.years_to_retirement,
    )

    gaps = {name: _gap_analysis(inputs, projected_value, needs[name]) for name in GAP_SCENARIOS}

    first_withdrawal = needs["base"].income_at_retirement
    schedule = simulate_withdrawals(
        projected_value,
        first_withdrawal,
        inputs.inflation_rate,
        inputs.post_retirement_return,
        inputs.years_in_retirement,
    )
    longevity = portfolio_longevity(
        projected_value,
        first_withdrawal,
        inputs.inflation_rate,
        inputs.post_retirement_return,
    )

    results = ProjectionResults(
        inputs=inputs,
        needs=needs,
        projected_value=projected_value,
        gaps=gaps,
        withdrawal_schedule=schedule,
        withdrawal_rate=withdrawal_rate(projected_value, first_withdrawal),
        portfolio_longevity=longevity,
        real_return=real_return(inputs.post_retirement_return, inputs.inflation_rate),
        break_even_return=inputs.inflation_rate,
        total_contributions=inputs.initial_investment + inputs.annual_contribution * inputs.years_to_retirement,
    )
    logger.debug(
        f"Recomputed projection: need ${needs['base'].portfolio_needed:,.0f}, "
        f"projected ${projected_value:,.0f}, longevity {longevity} yrs"
    )
    return results
