import json
import os
from typing import Any, Dict, Optional

from loguru import logger
from pydantic import BaseModel, Field, ValidationError, model_validator

from nestegg.constants import (
    INFLATION_SCENARIOS,
    MAX_AGE,
    MAX_INFLATION,
    MAX_RETURN,
    MIN_AGE,
    MIN_INFLATION,
    MIN_RETURN,
)


class ConfigurationError(Exception):
    """Raised when the inputs file cannot be loaded, parsed or validated."""


DEFAULT_INPUTS: Dict[str, Any] = {
    "current_age": 29,
    "retirement_age": 50,
    "life_expectancy": 90,
    "desired_annual_income": 100000.0,
    "tax_rate": 22.0,
    "inflation_scenario": "moderate",
    "custom_inflation": 2.7,
    "pre_retirement_return": 9.6,
    "post_retirement_return": 5.0,
    "initial_investment": 50000.0,
    "annual_contribution": 10000.0,
}


class ProjectionInput(BaseModel):
    """Validated inputs for one retirement projection. Rates are percentages."""

    current_age: int = Field(..., ge=MIN_AGE, le=MAX_AGE)
    retirement_age: int = Field(..., ge=MIN_AGE, le=MAX_AGE)
    life_expectancy: int = Field(..., ge=MIN_AGE, le=MAX_AGE)
    desired_annual_income: float = Field(
        ..., ge=0, description="After-tax income wanted per year, in today's dollars."
    )
    tax_rate: float = Field(..., ge=0.0, lt=100.0)
    inflation_rate: float = Field(..., ge=MIN_INFLATION, le=MAX_INFLATION)
    pre_retirement_return: float = Field(..., ge=MIN_RETURN, le=MAX_RETURN)
    post_retirement_return: float = Field(..., ge=MIN_RETURN, le=MAX_RETURN)
    initial_investment: float = Field(..., ge=0)
    annual_contribution: float = Field(..., ge=0)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_age_order(self) -> "ProjectionInput":
        if self.retirement_age <= self.current_age:
            raise ValueError("Retirement age must be after current age")
        if self.life_expectancy <= self.retirement_age:
            raise ValueError("Life expectancy must be after retirement age")
        return self

    @property
    def years_to_retirement(self) -> int:
        return self.retirement_age - self.current_age

    @property
    def years_in_retirement(self) -> int:
        return self.life_expectancy - self.retirement_age


def resolve_inflation_rate(scenario: str, custom_inflation: Optional[float] = None) -> float:
    """Maps an inflation scenario name ('low', 'moderate', 'high', 'custom') to a rate."""
    if scenario == "custom":
        if custom_inflation is None:
            raise ConfigurationError("Custom inflation scenario requires 'custom_inflation'")
        return float(custom_inflation)
    if scenario not in INFLATION_SCENARIOS:
        raise ConfigurationError(
            f"Unknown inflation scenario '{scenario}'. "
            f"Expected one of: {', '.join(list(INFLATION_SCENARIOS) + ['custom'])}"
        )
    return INFLATION_SCENARIOS[scenario]


def build_projection_input(values: Dict[str, Any]) -> ProjectionInput:
    """
    Builds a ProjectionInput from raw values merged over the defaults.

    An explicit `inflation_rate` wins over `inflation_scenario`.
    """
    unknown = set(values) - set(DEFAULT_INPUTS) - {"inflation_rate"}
    if unknown:
        raise ConfigurationError(f"Unknown input keys: {', '.join(sorted(unknown))}")

    merged = DEFAULT_INPUTS.copy()
    merged.update(values)

    scenario = merged.pop("inflation_scenario")
    custom_inflation = merged.pop("custom_inflation")
    if "inflation_rate" not in merged:
        merged["inflation_rate"] = resolve_inflation_rate(scenario, custom_inflation)

    try:
        return ProjectionInput(**merged)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid projection inputs: {e}") from e


def default_projection_inputs() -> ProjectionInput:
    """Returns the default scenario."""
    return build_projection_input({})


def load_projection_inputs(file_path: str) -> ProjectionInput:
    """Loads projection inputs from a JSON file, filling missing keys with defaults."""
    if not os.path.exists(file_path):
        raise ConfigurationError(f"Inputs file not found at: {file_path}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Error parsing JSON file '{file_path}': {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Inputs file '{file_path}' must contain a JSON object")

    inputs = build_projection_input(data)
    logger.debug(f"Loaded projection inputs from {file_path}")
    return inputs
