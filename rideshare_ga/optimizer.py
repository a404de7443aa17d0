#!/usr/bin/env python3
"""
Genetic Algorithm Optimizer
Main orchestrator assigning passengers to vehicles through generational evolution
"""

import time
import logging
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional, Callable, Sequence

import numpy as np

from .common import OptimizationError, safe_divide, DEFAULT_GENERATIONS
from .config import GeneticAlgorithmConfig
from .crossover import CrossoverOperator
from .fitness import SolutionEvaluator
from .models import Passenger, ProblemData, Solution, Vehicle
from .mutation import MutationOperator
from .population import PopulationManager
from .route_calculator import RouteCalculator
from .selection import SelectionOperator

logger = logging.getLogger(__name__)


@dataclass
class GAResults:
    """Results from genetic algorithm optimization"""
    best_solution: Solution
    best_score: float
    generation_found: int
    total_generations: int
    total_time: float
    convergence_reason: str
    has_capacity_issue: bool
    score_history: List[Dict[str, float]] = field(default_factory=list)
    stats: Dict[str, Any] = field(default_factory=dict)


class RideSharingOptimizer:
    """Genetic algorithm optimizer for passenger-to-vehicle assignment"""

    def __init__(self, passengers: Optional[Sequence[Passenger]], vehicles: Optional[Sequence[Vehicle]],
                 population_size: int, destination_lat: float, destination_lng: float, target_time,
                 config: Optional[GeneticAlgorithmConfig] = None, seed: Optional[int] = None):
        """Initialize optimizer for one run

        Args:
            passengers: Passengers to assign (may be empty)
            vehicles: Vehicle templates (may be empty, never mutated)
            population_size: Requested population size, floored at 50; ignored when config is given
            destination_lat: Shared destination latitude
            destination_lng: Shared destination longitude
            target_time: Arrival target, minutes since midnight or "HH:MM"
            config: GA parameters; built from population_size and seed when omitted
            seed: Random seed, overrides the config's seed when given

        Raises:
            ProblemDataError: If the input is malformed
        """
        if config is None:
            config = GeneticAlgorithmConfig(population_size=population_size, seed=seed)
        elif seed is not None:
            config = config.with_overrides(seed=seed)
        self.config = config
        self.rng = config.rng

        self.problem_data = ProblemData.create(passengers, vehicles, destination_lat,
                                               destination_lng, target_time)

        # Components
        self.route_calculator = RouteCalculator(self.problem_data)
        self.evaluator = SolutionEvaluator(self.problem_data, self.route_calculator)
        self.population_manager = PopulationManager(self.problem_data, self.route_calculator,
                                                    self.evaluator, self.rng)
        self.selection = SelectionOperator(config.tournament_size, self.rng)
        self.crossover_operator = CrossoverOperator(self.problem_data, self.route_calculator,
                                                    self.evaluator, self.rng)
        self.mutation_operator = MutationOperator(
            self.route_calculator, self.evaluator, self.rng,
            allow_capacity_increasing_moves=config.allow_capacity_increasing_moves)

        # Run state
        self.population: List[Solution] = []
        self.best_solution: Optional[Solution] = None
        self.best_score = float('-inf')
        self.best_generation = 0
        self.generation = 0
        self.generations_without_improvement = 0
        self._has_capacity_issue = False

        # Tracking
        self.score_history: List[Dict[str, float]] = []
        self.generation_times: List[float] = []

        # Callbacks
        self.generation_callback: Optional[Callable[[int, List[Solution], float], None]] = None

    @property
    def has_capacity_issue(self) -> bool:
        """True when total capacity is short or the returned best is still overloaded"""
        return self._has_capacity_issue

    def solve(self, generations: int = DEFAULT_GENERATIONS,
              initial_population: Optional[List[Solution]] = None) -> Solution:
        """Run the genetic algorithm and return the best solution found"""
        return self.optimize(generations, initial_population).best_solution

    def optimize(self, generations: int = DEFAULT_GENERATIONS,
                 initial_population: Optional[List[Solution]] = None) -> GAResults:
        """Run the genetic algorithm

        Args:
            generations: Maximum number of generations
            initial_population: Warm-start population, e.g. from get_latest_population()

        Returns:
            GAResults with the best solution and run statistics
        """
        start_time = time.time()

        if not self._validate_inputs():
            self.best_solution = Solution.empty()
            self.best_score = self.best_solution.score
            return self._build_results("empty_input", start_time)

        logger.info(f"Starting GA optimization: {len(self.problem_data.passengers)} passengers, "
                    f"{len(self.problem_data.vehicles)} vehicles, "
                    f"population {self.config.population_size}, max {generations} generations")

        self._initialize_population(initial_population)

        convergence_reason = "max_generations"
        for generation in range(1, generations + 1):
            self.generation = generation
            gen_start_time = time.time()

            self.population = self._evolve_generation(self.population)
            self.generation_times.append(time.time() - gen_start_time)

            generation_best = self._best_of(self.population)
            if generation_best.score > self.best_score and \
                    (not generation_best.has_capacity_overload() or self._has_capacity_issue):
                self.best_solution = generation_best.clone()
                self.best_score = generation_best.score
                self.best_generation = generation
                self.generations_without_improvement = 0
            else:
                self.generations_without_improvement += 1

            self._record_generation(generation)

            if self.generation_callback:
                self.generation_callback(generation, self.population, self.best_score)

            if self.generations_without_improvement >= self.config.max_generations_without_improvement:
                logger.info(f"Converged after {generation} generations "
                            f"({self.generations_without_improvement} without improvement)")
                convergence_reason = "convergence"
                break

        self._finalize_results()
        return self._build_results(convergence_reason, start_time)

    def _validate_inputs(self) -> bool:
        """Returns False when there is nothing to optimize"""
        self._has_capacity_issue = False
        if self.problem_data.is_empty:
            logger.info("No passengers or no vehicles; skipping optimization")
            return False

        total_capacity = self.problem_data.total_capacity
        passenger_count = len(self.problem_data.passengers)
        if total_capacity < passenger_count:
            logger.warning(f"Insufficient vehicle capacity: {total_capacity} seats "
                           f"for {passenger_count} passengers")
            self._has_capacity_issue = True
        return True

    def _initialize_population(self, initial_population: Optional[List[Solution]]):
        if initial_population:
            self.population = list(initial_population)
            self.evaluator.evaluate_population(self.population)
        else:
            self.population = self.population_manager.generate_initial_population(
                self.config.population_size)

        best = self._best_of(self.population)
        self.best_solution = best.clone()
        self.best_score = best.score
        self.best_generation = 0
        self.generation = 0
        self.generations_without_improvement = 0
        self.score_history = []
        self.generation_times = []
        self._record_generation(0)

    def _evolve_generation(self, population: List[Solution]) -> List[Solution]:
        """Evolve population for one generation"""
        elite_count = min(self.config.elite_count, len(population))
        ranked = sorted(population, key=lambda s: s.score, reverse=True)
        new_population = [solution.clone() for solution in ranked[:elite_count]]

        while len(new_population) < self.config.population_size:
            parent1, parent2 = self.selection.select_parents(population)
            child = self.crossover_operator.crossover(parent1, parent2)
            if self.rng.random() < self.config.mutation_rate:
                self.mutation_operator.mutate(child)
            child.generation = self.generation
            new_population.append(child)

        return new_population

    def _finalize_results(self):
        self.route_calculator.recompute_all(self.best_solution)
        if self.best_solution.has_capacity_overload():
            overloaded = [v.id for v in self.best_solution.vehicles if v.is_overloaded]
            logger.warning(f"Best solution still overloads vehicles {overloaded}")
            self._has_capacity_issue = True

    def _best_of(self, population: List[Solution]) -> Solution:
        if not population:
            raise OptimizationError("Population is empty")
        return max(population, key=lambda s: s.score)

    def _record_generation(self, generation: int):
        scores = [solution.score for solution in self.population]
        average = float(np.mean(scores))
        self.score_history.append({
            'generation': generation,
            'best': self.best_score,
            'average': average,
        })
        logger.debug(f"Gen {generation:3d}: Best={self.best_score:.4f}, Avg={average:.4f}, "
                     f"Stale={self.generations_without_improvement}")

    def _build_results(self, convergence_reason: str, start_time: float) -> GAResults:
        return GAResults(
            best_solution=self.best_solution,
            best_score=self.best_score,
            generation_found=self.best_generation,
            total_generations=self.generation,
            total_time=time.time() - start_time,
            convergence_reason=convergence_reason,
            has_capacity_issue=self._has_capacity_issue,
            score_history=list(self.score_history),
            stats=self._get_optimization_stats(),
        )

    def _get_optimization_stats(self) -> Dict[str, Any]:
        """Get comprehensive optimization statistics"""
        if not self.score_history:
            return {}

        best_per_generation = [entry['best'] for entry in self.score_history]
        avg_per_generation = [entry['average'] for entry in self.score_history]
        avg_gen_time = safe_divide(sum(self.generation_times), len(self.generation_times))

        return {
            'total_evaluations': self.evaluator.evaluations,
            'avg_generation_time': avg_gen_time,
            'best_score_progression': best_per_generation,
            'avg_score_progression': avg_per_generation,
            'score_improvement': self.best_score - best_per_generation[0],
            'convergence_generation': self.best_generation,
            'population_diversity': self._calculate_population_diversity(),
            'mutation_stats': {name: dict(counts)
                               for name, counts in self.mutation_operator.stats.items()},
        }

    def _calculate_population_diversity(self) -> float:
        """Coefficient of variation of total route distance across the population"""
        distances = [solution.total_distance() for solution in self.population]
        if not distances:
            return 0.0
        return float(np.std(distances) / max(np.mean(distances), 1.0))

    def get_latest_population(self) -> List[Solution]:
        """Copy of the current population list, for warm-starting another run"""
        return list(self.population)

    def set_generation_callback(self, callback: Callable[[int, List[Solution], float], None]):
        """Set callback for each generation"""
        self.generation_callback = callback
