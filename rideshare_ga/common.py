#!/usr/bin/env python3
"""
Common Utilities for Ride-Sharing GA Components
Logging setup, exception hierarchy and small numeric helpers shared across modules
"""

import sys
import math
import logging

# Common constants
DEFAULT_POPULATION_SIZE = 50
DEFAULT_MUTATION_RATE = 0.3
DEFAULT_ELITISM_RATE = 0.2
DEFAULT_TOURNAMENT_SIZE = 5
DEFAULT_MAX_GENERATIONS_WITHOUT_IMPROVEMENT = 20
DEFAULT_GENERATIONS = 150

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level=logging.INFO):
    """Set up logging configuration"""
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Safely divide with default for division by zero"""
    return numerator / denominator if denominator != 0 else default


def parse_time_of_day(value) -> int:
    """Convert a target time to minutes since midnight

    Accepts an int/float number of minutes or an "HH:MM" / "HH:MM:SS" string.

    Raises:
        ProblemDataError: If the value cannot be interpreted or is out of range
    """
    if isinstance(value, bool):
        raise ProblemDataError(f"Invalid target time: {value!r}")

    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            raise ProblemDataError(f"Invalid target time: {value!r}")
        minutes = int(value)
    elif isinstance(value, str):
        parts = value.strip().split(':')
        if len(parts) not in (2, 3):
            raise ProblemDataError(f"Invalid target time: {value!r}")
        try:
            hours, mins = int(parts[0]), int(parts[1])
        except ValueError as e:
            raise ProblemDataError(f"Invalid target time: {value!r}") from e
        if not (0 <= mins < 60):
            raise ProblemDataError(f"Invalid target time: {value!r}")
        minutes = hours * 60 + mins
    else:
        raise ProblemDataError(f"Invalid target time: {value!r}")

    if not (0 <= minutes < 24 * 60):
        raise ProblemDataError(f"Target time out of range (0-1439 minutes): {value!r}")
    return minutes


# Common exception classes
class RideShareError(Exception):
    """Base ride-sharing optimizer exception"""
    pass


class ProblemDataError(RideShareError, ValueError):
    """Malformed problem input (capacities, coordinates, ids, target time)"""
    pass


class ConfigurationError(RideShareError, ValueError):
    """Invalid genetic algorithm configuration"""
    pass


class OptimizationError(RideShareError):
    """Optimization error"""
    pass
