# constants.py

PERCENT: float = 100.0

# Return ~ inflation threshold (fractional units) for the growing annuity
DEGENERATE_RATE_EPSILON: float = 1e-4

SOLVER_INITIAL_GUESS: float = 0.08
SOLVER_MAX_ITERATIONS: int = 50
SOLVER_TOLERANCE: float = 1e-4

LONGEVITY_CEILING_YEARS: int = 200
SAMPLE_INTERVAL_YEARS: int = 5

# Inflation presets (percent)
INFLATION_SCENARIOS = {
    "low": 1.8,
    "moderate": 2.7,
    "high": 4.5,
}
CONSERVATIVE_INFLATION: float = INFLATION_SCENARIOS["high"]
OPTIMISTIC_INFLATION: float = INFLATION_SCENARIOS["low"]

MIN_AGE: int = 18
MAX_AGE: int = 120
MIN_INFLATION: float = -20.0
MAX_INFLATION: float = 50.0
# Accepted annual returns (percent); keeps compounding finite over the longest horizon
MIN_RETURN: float = -50.0
MAX_RETURN: float = 100.0
