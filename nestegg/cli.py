import argparse
import math
import sys
from typing import List, Optional

from loguru import logger

from nestegg.analytics import schedule_to_frame
from nestegg.config import ConfigurationError, default_projection_inputs, load_projection_inputs
from nestegg.planner import ProjectionResults, recompute

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}"


def _configure_logging(level: str, log_file: Optional[str]) -> None:
    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level)
    if log_file:
        logger.add(log_file, format=LOG_FORMAT, level=level, rotation="10 MB")


def log_outlook(results: ProjectionResults) -> None:
    """Logs the headline numbers of a projection."""
    inputs = results.inputs
    need = results.base_need
    gap = results.base_gap

    logger.info(f"--- Retirement Outlook (age {inputs.current_age} -> {inputs.retirement_age}) ---")
    logger.info(
        f"To get ${inputs.desired_annual_income:,.0f} after taxes you need "
        f"${need.pre_tax_income:,.0f} pre-tax (${need.income_at_retirement:,.0f} at retirement)"
    )
    logger.info(f"Minimum needed: ${need.portfolio_needed:,.0f}")
    logger.info(f"Projected:      ${results.projected_value:,.0f}")

    if results.on_track:
        logger.info(f"Surplus:        ${-gap.gap:,.0f}")
    else:
        logger.info(f"Shortfall:      ${gap.gap:,.0f}")
        logger.info(
            f"Option 1: save an additional ${gap.additional_annual_contribution:,.0f}/year "
            f"(${gap.additional_annual_contribution / 12:,.0f}/month)"
        )
        if gap.required_return.converged and math.isfinite(gap.required_return.rate):
            logger.info(f"Option 2: earn {gap.required_return.rate:.1f}% annual returns")
        else:
            logger.warning("Option 2: no feasible return found")

    for name, scenario_need in results.needs.items():
        logger.info(
            f"  {name} ({scenario_need.inflation_rate:.1f}% inflation): need ${scenario_need.portfolio_needed:,.0f}"
        )

    logger.info(f"Initial withdrawal rate: {results.withdrawal_rate:.1f}%")
    if results.sustains_indefinitely:
        logger.info("Portfolio longevity: indefinite (portfolio sustains itself)")
    else:
        logger.info(f"Portfolio longevity: {results.portfolio_longevity} years")
    logger.info(f"Real return in retirement: {results.real_return:.1f}%")
    if results.real_return < 0:
        logger.warning("Returns during retirement are below inflation; purchasing power will erode")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="nestegg", description="Retirement savings projection")
    parser.add_argument("config", nargs="?", help="JSON file with projection inputs (defaults if omitted)")
    parser.add_argument("--log-file", default=None, help="Also write logs to this file")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"],
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level, args.log_file)

    try:
        if args.config:
            logger.info(f"Loading projection inputs from: {args.config}")
            inputs = load_projection_inputs(args.config)
        else:
            logger.info("No inputs file specified. Using default scenario.")
            inputs = default_projection_inputs()
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    results = recompute(inputs)
    log_outlook(results)

    print(schedule_to_frame(results.withdrawal_schedule, results.projected_value).to_string(index=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
