"""
HorseRace command line runner

Asks for the number of horses (or takes --horses), runs one race with
a live track display and prints the final ranking.

Usage:
    horserace                      # Prompt for the number of horses
    horserace --horses 5           # Race 5 horses
    horserace --horses 8 --fast    # Shorter pauses
    horserace --seed 42            # Reproducible strides
    horserace --log-level DEBUG --log-file race.log
"""

from typing import Callable, List, Optional, TextIO
import argparse
import logging
import sys

from horserace.config import LOG_LEVELS, RaceConfig
from horserace.display.console import Console
from horserace.simulation.controller import RaceStatus, run_race


logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Threaded console horse race",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Prompt for the field size
    horserace

    # Race 5 horses with a reproducible outcome
    horserace --horses 5 --seed 7

    # Quick race without the closing pause
    horserace --horses 3 --fast --no-settle
        """
    )

    parser.add_argument(
        "--horses",
        type=int,
        metavar="N",
        help="Number of horses (prompted if omitted)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for horse strides"
    )
    parser.add_argument(
        "--fast",
        action="store_true",
        help="Shorten every pause tenfold"
    )
    parser.add_argument(
        "--no-settle",
        action="store_true",
        help="Skip the pause after the last horse finishes"
    )
    parser.add_argument(
        "--clear",
        action="store_true",
        help="Clear the screen before the race is drawn"
    )

    # Logging
    parser.add_argument(
        "--log-level",
        default=RaceConfig.log_level,
        type=str.upper,
        choices=LOG_LEVELS,
        help=f"Logging level (default: {RaceConfig.log_level})"
    )
    parser.add_argument(
        "--log-file",
        type=str,
        help="Also write logs to this file"
    )

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> RaceConfig:
    """Create race configuration from arguments."""
    config = RaceConfig(
        seed=args.seed,
        log_level=args.log_level,
        log_file=args.log_file,
        clear_screen=args.clear,
    )
    if args.fast:
        config = config.fast()
    if args.no_settle:
        config.settle_period_s = 0.0
    return config


def setup_logging(config: RaceConfig) -> None:
    """Configure logging.

    Logs go to stderr so they do not break the redraw on stdout.
    """
    log_format = "%(asctime)s [%(levelname)s] %(threadName)s %(message)s"
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if config.log_file:
        handlers.append(logging.FileHandler(config.log_file, encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format=log_format,
        handlers=handlers,
    )


def prompt_horse_count(
    input_fn: Callable[[str], str] | None = None,
    output: TextIO | None = None,
) -> Optional[int]:
    """Ask the user for the number of horses.

    Args:
        input_fn: Reads one line after showing a prompt
        output: Stream for messages (stdout if None)

    Returns:
        The entered number, or None if it is not an integer
    """
    input_fn = input_fn or input
    output = output or sys.stdout
    output.write("🐎 Welcome to the horse race!\n")
    raw = input_fn("Enter the number of horses in the race: ")

    try:
        count = int(raw.strip())
    except ValueError:
        output.write(f"'{raw.strip()}' is not a whole number.\n")
        return None

    logger.info("User entered horse count: %d", count)
    return count


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point."""
    args = parse_args(argv)
    config = build_config(args)
    setup_logging(config)

    logger.info("=== Horse race start ===")
    try:
        if args.horses is not None:
            horse_count = args.horses
        else:
            try:
                horse_count = prompt_horse_count()
            except EOFError:
                horse_count = None
        if horse_count is None:
            return 2

        outcome = run_race(horse_count, config=config, console=Console())
    except KeyboardInterrupt:
        logger.error("Race interrupted")
        print("\nRace interrupted.")
        return 130
    finally:
        logger.info("=== Horse race end ===")

    if outcome.status == RaceStatus.INVALID_CONFIG:
        return 2
    if outcome.status == RaceStatus.FAILED:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
