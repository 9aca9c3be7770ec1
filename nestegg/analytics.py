from typing import Iterable, Optional, Sequence

import numpy as np
import pandas as pd

from nestegg.config import ProjectionInput
from nestegg.planner import ProjectionResults, recompute
from nestegg.projection import WithdrawalPoint


def schedule_to_frame(points: Sequence[WithdrawalPoint], starting_portfolio: float) -> pd.DataFrame:
    """
    Tabulates a sampled withdrawal trajectory.
    Returns a DataFrame with columns:
    - Year, Withdrawal, Balance, Depleted
    - Pct of Start (balance as a percentage of the starting portfolio; 100 at year 0)
    """
    if not points:
        return pd.DataFrame(columns=["Year", "Withdrawal", "Balance", "Depleted", "Pct of Start"])

    df = pd.DataFrame({
        "Year": [p.year for p in points],
        "Withdrawal": [p.withdrawal_amount for p in points],
        "Balance": [p.balance for p in points],
        "Depleted": [p.depleted for p in points],
    })

    if starting_portfolio > 0:
        df["Pct of Start"] = df["Balance"] / starting_portfolio * 100
    else:
        df["Pct of Start"] = 0.0
    df.loc[df["Year"] == 0, "Pct of Start"] = 100.0
    return df


def scenario_frame(results: ProjectionResults) -> pd.DataFrame:
    """
    Required portfolio for each inflation scenario, indexed by scenario name.
    The spread between scenarios shows how sensitive the plan is to inflation.
    """
    rows = []
    for name, need in results.needs.items():
        rows.append({
            "Scenario": name,
            "Inflation": need.inflation_rate,
            "Income at Retirement": need.income_at_retirement,
            "Portfolio Needed": need.portfolio_needed,
            "Gap": need.portfolio_needed - results.projected_value,
        })
    df = pd.DataFrame(rows)
    df.set_index("Scenario", inplace=True)
    return df


def initial_investment_sweep(
    inputs: ProjectionInput,
    amounts: Optional[Iterable[float]] = None
) -> pd.DataFrame:
    """
    Re-runs the projection for a range of starting balances.
    Defaults to nine points from zero to twice the current initial investment.
    """
    if amounts is None:
        amounts = np.linspace(0.0, 2 * inputs.initial_investment, 9)

    rows = []
    for amount in amounts:
        results = recompute(inputs.model_copy(update={"initial_investment": float(amount)}))
        gap = results.base_gap
        rows.append({
            "Initial Investment": float(amount),
            "Projected Value": results.projected_value,
            "Gap": gap.gap,
            "Required Return": gap.required_return.rate,
            "Converged": gap.required_return.converged,
            "Longevity": results.portfolio_longevity,
        })
    return pd.DataFrame(rows)
