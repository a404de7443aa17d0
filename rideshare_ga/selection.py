#!/usr/bin/env python3
"""
Tournament Selection
Picks parents for crossover from a scored population
"""

import random
from typing import List, Optional, Tuple

from .common import DEFAULT_TOURNAMENT_SIZE
from .models import Solution


class SelectionOperator:
    """Tournament selection over a list of scored solutions"""

    def __init__(self, tournament_size: int = DEFAULT_TOURNAMENT_SIZE,
                 rng: Optional[random.Random] = None):
        self.tournament_size = tournament_size
        self.rng = rng if rng is not None else random.Random()

    def tournament_selection_with_index(self, population: List[Solution]) -> Tuple[int, Solution]:
        """Run one tournament

        Draws ``min(tournament_size, len(population))`` members with
        replacement. The first drawn member wins ties.

        Returns:
            Population index of the winner and a clone of it
        """
        if not population:
            raise ValueError("Cannot select from an empty population")

        draws = min(self.tournament_size, len(population))
        best_index = self.rng.randrange(len(population))
        for _ in range(draws - 1):
            index = self.rng.randrange(len(population))
            if population[index].score > population[best_index].score:
                best_index = index

        return best_index, population[best_index].clone()

    def tournament_selection(self, population: List[Solution]) -> Solution:
        """Clone of the tournament winner"""
        return self.tournament_selection_with_index(population)[1]

    def select_parents(self, population: List[Solution]) -> Tuple[Solution, Solution]:
        """Select two parents drawn from different population members

        With a single-member population both parents are clones of it.
        """
        index1, parent1 = self.tournament_selection_with_index(population)
        index2, parent2 = self.tournament_selection_with_index(population)

        if len(population) > 1:
            while index2 == index1:
                index2, parent2 = self.tournament_selection_with_index(population)

        return parent1, parent2
