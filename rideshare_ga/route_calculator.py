#!/usr/bin/env python3
"""
Route Calculator
Straight-line route distances for a fixed pickup sequence ending at the shared destination
"""

from typing import List

from .geo import haversine_km
from .models import Passenger, ProblemData, Solution, Vehicle


class RouteCalculator:
    """Computes vehicle route distances and insertion costs"""

    def __init__(self, problem_data: ProblemData):
        """Initialize route calculator

        Args:
            problem_data: Problem snapshot holding the destination and vehicle templates
        """
        self.problem_data = problem_data
        self.destination_lat = problem_data.destination_lat
        self.destination_lng = problem_data.destination_lng

    def distance_to_destination(self, latitude: float, longitude: float) -> float:
        return haversine_km(latitude, longitude, self.destination_lat, self.destination_lng)

    def route_distance(self, vehicle: Vehicle) -> float:
        """Distance of start -> pickups in assignment order -> destination

        Returns 0 when the vehicle has no passengers.
        """
        return self.order_distance(vehicle, vehicle.assigned_passengers)

    def order_distance(self, vehicle: Vehicle, passengers: List[Passenger]) -> float:
        """Route distance for a vehicle if it picked up ``passengers`` in this order"""
        if not passengers:
            return 0.0

        total = 0.0
        current_lat = vehicle.start_latitude
        current_lng = vehicle.start_longitude
        for passenger in passengers:
            total += haversine_km(current_lat, current_lng, passenger.latitude, passenger.longitude)
            current_lat = passenger.latitude
            current_lng = passenger.longitude

        total += self.distance_to_destination(current_lat, current_lng)
        return total

    def marginal_insertion_cost(self, vehicle: Vehicle, passenger: Passenger) -> float:
        """Approximate extra distance from appending a passenger to the route

        Measured against the old last-leg-to-destination, not a full re-route.
        The vehicle is not modified.
        """
        if not vehicle.assigned_passengers:
            return (haversine_km(vehicle.start_latitude, vehicle.start_longitude,
                                 passenger.latitude, passenger.longitude) +
                    self.distance_to_destination(passenger.latitude, passenger.longitude))

        last = vehicle.assigned_passengers[-1]
        current_leg = self.distance_to_destination(last.latitude, last.longitude)
        new_legs = (haversine_km(last.latitude, last.longitude, passenger.latitude, passenger.longitude) +
                    self.distance_to_destination(passenger.latitude, passenger.longitude))
        return new_legs - current_leg

    def recompute_all(self, solution: Solution) -> None:
        """Refresh every vehicle's total distance from its current pickup order"""
        for vehicle in solution.vehicles:
            vehicle.total_distance = self.route_distance(vehicle)

    def deep_copy_vehicles(self) -> List[Vehicle]:
        """Fresh vehicles from the problem templates, empty and with zero distance"""
        return [template.empty_copy() for template in self.problem_data.vehicles]
