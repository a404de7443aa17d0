#!/usr/bin/env python3
"""
Ride-Sharing Genetic Algorithm Package
Assigns passengers to capacity-limited vehicles heading to one shared destination
"""

# Core components
from .models import Passenger, Vehicle, Solution, Destination, ProblemData
from .config import GeneticAlgorithmConfig, load_config
from .optimizer import RideSharingOptimizer, GAResults

# Route model and fitness evaluation
from .geo import haversine_km
from .route_calculator import RouteCalculator
from .fitness import SolutionEvaluator, ScoreBreakdown

# Genetic operators
from .population import PopulationManager
from .selection import SelectionOperator
from .crossover import CrossoverOperator
from .mutation import MutationOperator, MutationType

# Reporting and input
from .validation import SolutionValidator, ValidationReport
from .formatter import SolutionFormatter, format_minutes
from .problem_loader import load_problem

# Common utilities
from .common import RideShareError, ProblemDataError, ConfigurationError, OptimizationError

__version__ = "1.0.0"

__all__ = [
    # Core
    'Passenger',
    'Vehicle',
    'Solution',
    'Destination',
    'ProblemData',
    'GeneticAlgorithmConfig',
    'load_config',
    'RideSharingOptimizer',
    'GAResults',

    # Route model and fitness
    'haversine_km',
    'RouteCalculator',
    'SolutionEvaluator',
    'ScoreBreakdown',

    # Operators
    'PopulationManager',
    'SelectionOperator',
    'CrossoverOperator',
    'MutationOperator',
    'MutationType',

    # Reporting and input
    'SolutionValidator',
    'ValidationReport',
    'SolutionFormatter',
    'format_minutes',
    'load_problem',

    # Errors
    'RideShareError',
    'ProblemDataError',
    'ConfigurationError',
    'OptimizationError',
]
