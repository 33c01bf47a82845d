"""
Position Sizing Calculator - Main Entry Point

Usage:
    python main.py --price-high 50000 --price-low 49000 ...   # One-shot calculation
    python main.py --inputs scenarios.yaml                     # Batch from YAML
    python main.py --mode tui                                  # Interactive calculator
"""

from __future__ import annotations
import argparse
import json
import math
import sys
from typing import Callable, Dict, List, Optional, Sequence

from rich.console import Console

from config.config_manager import ConfigManager, default_inputs
from config.models import AppConfig
from src.domain.exceptions import ConfigurationError, InputError
from src.domain.services.sizing import SizingSession, derive, parse_inputs
from src.infrastructure.adapters import Scenario, ScenarioFileLoader
from src.tui.panels import render_sizing_panel
from src.utils import (
    flush_all_loggers,
    get_logger,
    set_log_timezone,
    setup_category_logging,
    shutdown_logging,
)

logger = get_logger(__name__)

# CLI flag destination -> input record field
INPUT_FLAGS: Dict[str, str] = {
    "actual_price": "--actual-price",
    "leverage_price": "--leverage-price",
    "price_high": "--price-high",
    "price_low": "--price-low",
    "direction": "--direction",
    "initial_capital": "--initial-capital",
    "take_profit_percent": "--take-profit",
    "position_size": "--position-size",
    "losses_factor": "--losses-factor",
}

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_INPUT_ERROR = 2


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Position Sizing Calculator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --actual-price 100 --leverage-price 10 --price-high 50000 \\
                 --price-low 49000 --initial-capital 10000 --position-size 1
  python main.py --inputs scenarios.yaml --json
  python main.py --mode tui

Values starting with "-" must be attached with "=", e.g. --price-low=-1e3
or --price-high=-Infinity, so they are not read as options.
        """
    )

    parser.add_argument(
        "--mode",
        type=str,
        default="calc",
        choices=["calc", "tui"],
        help="calc: one-shot calculation (default); tui: interactive calculator"
    )

    parser.add_argument(
        "--env",
        type=str,
        default="dev",
        help="Environment whose {env}.yaml overrides base.yaml (default: dev)"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to an extra config file applied after base and env configs"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging (DEBUG level for all categories)"
    )

    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set log level (default: from config, ignored if --verbose is set)"
    )

    # Inputs are taken as raw text and parsed like form input
    inputs_group = parser.add_argument_group("Inputs")
    for dest, flag in INPUT_FLAGS.items():
        inputs_group.add_argument(flag, dest=dest, type=str, metavar="VALUE")
    inputs_group.add_argument(
        "--inputs",
        type=str,
        help="YAML file with one input mapping or a list of scenarios"
    )

    output_group = parser.add_argument_group("Output")
    output_group.add_argument(
        "--json",
        action="store_true",
        help="Print inputs and results as JSON instead of a table"
    )

    return parser.parse_args(argv)


def flag_overrides(args: argparse.Namespace) -> Dict[str, str]:
    """Input fields given on the command line."""
    return {
        field: getattr(args, field)
        for field in INPUT_FLAGS
        if getattr(args, field) is not None
    }


def collect_scenarios(args: argparse.Namespace, config: AppConfig) -> List[Scenario]:
    """
    Build the scenarios to calculate.

    Flags override the configured defaults, and with --inputs they also
    override every scenario from the file.
    """
    overrides = flag_overrides(args)
    base = default_inputs(config)

    if not args.inputs:
        return [Scenario(name="position", inputs=parse_inputs(overrides, base))]

    scenarios = ScenarioFileLoader(args.inputs).load(base)
    if overrides:
        scenarios = [
            Scenario(name=s.name, inputs=parse_inputs(overrides, s.inputs))
            for s in scenarios
        ]
    return scenarios


def json_safe(data: Dict[str, object]) -> Dict[str, object]:
    """Replace NaN and infinite floats with None so the output is strict JSON."""
    return {
        key: None if isinstance(value, float) and not math.isfinite(value) else value
        for key, value in data.items()
    }


def run_calc(args: argparse.Namespace, config: AppConfig) -> int:
    """
    Run one-shot calculation mode.

    Returns:
        Exit code.
    """
    scenarios = collect_scenarios(args, config)
    results = [(scenario, derive(scenario.inputs)) for scenario in scenarios]
    logger.info(f"Calculated {len(results)} scenario(s)")

    if args.json:
        payload = [
            {
                "name": scenario.name,
                "inputs": json_safe(scenario.inputs.to_dict()),
                "result": json_safe(result.to_dict()),
            }
            for scenario, result in results
        ]
        print(json.dumps(payload if len(payload) > 1 else payload[0], indent=2, allow_nan=False))
        return EXIT_OK

    console = Console()
    for scenario, result in results:
        console.print(render_sizing_panel(
            scenario.inputs,
            result,
            decimals=config.display.decimals,
            title=f"Position Sizing - {scenario.name}",
        ))
    return EXIT_OK


def run_tui(args: argparse.Namespace, config: AppConfig) -> int:
    """
    Run the interactive calculator.

    Returns:
        Exit code.
    """
    from src.tui import SizingCalculatorApp

    defaults = parse_inputs(flag_overrides(args), default_inputs(config))
    session = SizingSession(defaults)
    app = SizingCalculatorApp(session, env=args.env, decimals=config.display.decimals)
    app.run()
    return EXIT_OK


def create_runner(mode: str) -> Callable[[argparse.Namespace, AppConfig], int]:
    """
    Factory function to create the runner for the given mode.

    Args:
        mode: Operational mode (calc, tui).

    Returns:
        Function running the mode and returning an exit code.
    """
    runners = {
        "calc": run_calc,
        "tui": run_tui,
    }
    return runners[mode]


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    try:
        config = ConfigManager(env=args.env).load(args.config)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    set_log_timezone(config.logging.timezone)

    # The TUI owns the terminal, so console logging is only for calc mode
    setup_category_logging(
        env=args.env,
        log_dir=config.logging.log_dir,
        level=args.log_level or config.logging.level,
        console=args.mode == "calc",
        verbose=args.verbose,
        to_file=config.logging.to_file,
    )
    logger.info(f"Starting position sizing calculator (mode={args.mode}, env={args.env})")

    runner = create_runner(args.mode)
    try:
        return runner(args, config)
    except InputError as e:
        logger.debug(f"Rejected input: {e}")
        print(f"Input error: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR
    finally:
        flush_all_loggers()
        shutdown_logging()


if __name__ == "__main__":
    sys.exit(main())
