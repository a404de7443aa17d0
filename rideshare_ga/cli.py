#!/usr/bin/env python3
"""
Ride-Sharing Planner - Command Line Interface
Loads a problem file, runs the genetic optimizer and prints the assignment
"""

import sys
import json
import logging
import argparse
from typing import List, Optional

from .common import ConfigurationError, ProblemDataError, setup_logging, DEFAULT_GENERATIONS
from .config import GeneticAlgorithmConfig, load_config
from .formatter import SolutionFormatter
from .optimizer import RideSharingOptimizer
from .problem_loader import load_problem
from .validation import SolutionValidator

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='rideshare-plan',
        description='Ride-Sharing Genetic Optimizer - Command Line Interface',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        'problem',
        help='Problem file (JSON or YAML) with destination, passengers and vehicles'
    )

    parser.add_argument(
        '--generations', '-g',
        type=int,
        default=DEFAULT_GENERATIONS,
        help='Maximum number of generations'
    )

    parser.add_argument(
        '--population-size', '-p',
        type=int,
        help='Population size (values below 50 are raised to 50)'
    )

    parser.add_argument(
        '--seed', '-s',
        type=int,
        help='Random seed for a replayable run'
    )

    parser.add_argument(
        '--config', '-c',
        type=str,
        help='GA configuration file (overrides any config embedded in the problem file)'
    )

    parser.add_argument(
        '--json',
        action='store_true',
        help='Print the result as JSON'
    )

    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        default='WARNING',
        help='Logging level'
    )

    parser.add_argument(
        '--strict',
        action='store_true',
        help='Exit with status 1 when the result has a capacity issue'
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point"""
    args = build_parser().parse_args(argv)
    setup_logging(getattr(logging, args.log_level))

    try:
        problem, embedded_config = load_problem(args.problem)
        config = load_config(args.config) if args.config else embedded_config
        config = (config or GeneticAlgorithmConfig()).with_overrides(
            population_size=args.population_size, seed=args.seed)
    except FileNotFoundError as e:
        logger.error(str(e))
        return 2
    except (ProblemDataError, ConfigurationError) as e:
        logger.error(f"Invalid input: {e}")
        return 2

    optimizer = RideSharingOptimizer(
        list(problem.passengers), list(problem.vehicles), config.population_size,
        problem.destination_lat, problem.destination_lng, problem.target_time,
        config=config)
    results = optimizer.optimize(args.generations)

    solution = results.best_solution
    report = SolutionValidator().validate(solution, problem.passengers)
    formatter = SolutionFormatter()

    if args.json:
        output = formatter.format_solution_dict(solution)
        output['has_capacity_issue'] = results.has_capacity_issue
        output['convergence_reason'] = results.convergence_reason
        output['generations'] = results.total_generations
        output['is_feasible'] = report.is_feasible
        print(json.dumps(output, indent=2))
    else:
        breakdown = optimizer.evaluator.breakdown(solution) if solution.vehicles else None
        print(formatter.format_solution_cli(solution, problem, breakdown))
        print(f"Generations: {results.total_generations} ({results.convergence_reason}), "
              f"time {results.total_time:.2f}s")
        print()
        print(report.summary())

    if args.strict and results.has_capacity_issue:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
