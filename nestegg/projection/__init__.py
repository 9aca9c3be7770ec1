"""
Retirement projection engine.

Pure functions for growing savings, sizing the retirement portfolio, solving
for the return that closes a gap, and simulating withdrawals once retired.

All public names are re-exported here.
"""

# Models
from nestegg.projection.models import (
    InvalidInputError,
    RetirementNeed,
    RequiredReturn,
    GapAnalysis,
    WithdrawalPoint,
)

# Growth Projector
from nestegg.projection.growth import (
    future_value,
)

# Retirement Needs Evaluator
from nestegg.projection.needs import (
    gross_up_for_tax,
    real_return,
    retirement_need,
)

# Return Solver
from nestegg.projection.solver import (
    required_return,
    additional_annual_contribution,
)

# Withdrawal Simulator / Longevity Estimator
from nestegg.projection.withdrawal import (
    simulate_withdrawals,
    portfolio_longevity,
    withdrawal_rate,
)

__all__ = [
    # Models
    "InvalidInputError",
    "RetirementNeed",
    "RequiredReturn",
    "GapAnalysis",
    "WithdrawalPoint",
    # Growth
    "future_value",
    # Needs
    "gross_up_for_tax",
    "real_return",
    "retirement_need",
    # Solver
    "required_return",
    "additional_annual_contribution",
    # Withdrawals
    "simulate_withdrawals",
    "portfolio_longevity",
    "withdrawal_rate",
]
