#!/usr/bin/env python3
"""
GA Test Utilities
Common test setup patterns and utilities for ride-sharing GA tests
"""

import random
import unittest
from collections import Counter
from typing import Dict, List, Optional, Sequence

from rideshare_ga import (
    Passenger, Vehicle, Solution, ProblemData,
    RouteCalculator, SolutionEvaluator
)

# Shared destination (Tel Aviv center) and arrival target
DEST_LAT = 32.0853
DEST_LNG = 34.7818
TARGET_TIME = "08:00"


class RideShareTestBase(unittest.TestCase):
    """Base test class with common ride-sharing test setup"""

    def setUp(self):
        """Set up common test fixtures"""
        # Six passengers spread north and east of the destination
        self.passengers = [
            self.make_passenger(1, 32.1050, 34.7900),
            self.make_passenger(2, 32.1100, 34.8000),
            self.make_passenger(3, 32.0950, 34.8200),
            self.make_passenger(4, 32.1300, 34.8100),
            self.make_passenger(5, 32.0700, 34.8300),
            self.make_passenger(6, 32.1200, 34.7950),
        ]

        # Three vehicles with total capacity 7
        self.vehicles = [
            self.make_vehicle(101, 3, 32.1400, 34.8000),
            self.make_vehicle(102, 2, 32.0600, 34.8400),
            self.make_vehicle(103, 2, 32.1000, 34.8500),
        ]

        self.problem = self.create_problem(self.passengers, self.vehicles)
        self.calculator = RouteCalculator(self.problem)
        self.evaluator = SolutionEvaluator(self.problem, self.calculator)
        self.rng = random.Random(42)

    @staticmethod
    def make_passenger(passenger_id: int, lat: float, lng: float, name: Optional[str] = None) -> Passenger:
        return Passenger(passenger_id, name or f"Passenger {passenger_id}", lat, lng)

    @staticmethod
    def make_vehicle(vehicle_id: int, capacity: int, lat: float, lng: float) -> Vehicle:
        return Vehicle(vehicle_id, capacity, lat, lng, driver_name=f"Driver {vehicle_id}")

    @staticmethod
    def create_problem(passengers: Sequence[Passenger], vehicles: Sequence[Vehicle],
                       dest_lat: float = DEST_LAT, dest_lng: float = DEST_LNG,
                       target_time=TARGET_TIME) -> ProblemData:
        return ProblemData.create(passengers, vehicles, dest_lat, dest_lng, target_time)

    def make_solution(self, assignments: Dict[int, List[int]],
                      problem: Optional[ProblemData] = None) -> Solution:
        """Build a solution from vehicle index -> passenger ids (pickup order)

        Args:
            assignments: Mapping of vehicle position to ordered passenger ids
            problem: Problem to build from; the default fixture when omitted

        Returns:
            Unscored Solution with fresh vehicles
        """
        problem = problem or self.problem
        by_id = problem.passenger_by_id()
        vehicles = [template.empty_copy() for template in problem.vehicles]
        for index, passenger_ids in assignments.items():
            vehicles[index].assigned_passengers.extend(by_id[pid] for pid in passenger_ids)
        return Solution(vehicles)

    def assert_each_passenger_once(self, solution: Solution,
                                   passengers: Optional[Sequence[Passenger]] = None):
        """Assert every passenger appears in exactly one vehicle, exactly once"""
        passengers = self.passengers if passengers is None else passengers
        counts = Counter(solution.assigned_passenger_ids())
        self.assertEqual(set(counts), {p.id for p in passengers})
        self.assertTrue(all(count == 1 for count in counts.values()),
                        f"Duplicate assignments: {counts}")

    def assert_no_overload(self, solution: Solution):
        for vehicle in solution.vehicles:
            self.assertLessEqual(len(vehicle.assigned_passengers), vehicle.capacity,
                                 f"Vehicle {vehicle.id} is overloaded")
