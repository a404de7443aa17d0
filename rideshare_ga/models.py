#!/usr/bin/env python3
"""
Ride-Sharing Domain Models
Passengers, vehicles, candidate solutions and the immutable problem snapshot
"""

import math
from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple, Dict, Any, Set, Sequence

from .common import ProblemDataError, parse_time_of_day
from .geo import is_valid_location


@dataclass(frozen=True)
class Passenger:
    """A passenger waiting to be picked up (read-only during optimization)"""
    id: int
    name: str
    latitude: float
    longitude: float
    address: Optional[str] = None
    estimated_pickup_time: Optional[str] = None  # written downstream, never by the optimizer

    def with_pickup_time(self, pickup_time: str) -> 'Passenger':
        """Return a copy carrying the estimated pickup time"""
        return replace(self, estimated_pickup_time=pickup_time)

    def __str__(self) -> str:
        if self.address:
            return f"{self.name} (ID: {self.id}, {self.address})"
        return f"{self.name} (ID: {self.id})"


@dataclass(eq=False)
class Vehicle:
    """A vehicle with a seating capacity and an ordered pickup list"""
    id: int
    capacity: int
    start_latitude: float
    start_longitude: float
    start_address: Optional[str] = None
    driver_name: Optional[str] = None
    assigned_passengers: List[Passenger] = field(default_factory=list)
    total_distance: float = 0.0              # Kilometers, derived from the pickup order
    departure_time: Optional[str] = None     # Written by the routing collaborator
    total_time: float = 0.0                  # Minutes, written by the routing collaborator

    @property
    def passenger_count(self) -> int:
        return len(self.assigned_passengers)

    @property
    def spare_capacity(self) -> int:
        return self.capacity - len(self.assigned_passengers)

    @property
    def has_spare_capacity(self) -> bool:
        return len(self.assigned_passengers) < self.capacity

    @property
    def is_overloaded(self) -> bool:
        return len(self.assigned_passengers) > self.capacity

    def copy(self) -> 'Vehicle':
        """Create a copy with its own assignment list (passengers are shared)"""
        return Vehicle(
            id=self.id,
            capacity=self.capacity,
            start_latitude=self.start_latitude,
            start_longitude=self.start_longitude,
            start_address=self.start_address,
            driver_name=self.driver_name,
            assigned_passengers=list(self.assigned_passengers),
            total_distance=self.total_distance,
            departure_time=self.departure_time,
            total_time=self.total_time,
        )

    def empty_copy(self) -> 'Vehicle':
        """Create a copy of this vehicle template with no passengers assigned"""
        return Vehicle(
            id=self.id,
            capacity=self.capacity,
            start_latitude=self.start_latitude,
            start_longitude=self.start_longitude,
            start_address=self.start_address,
            driver_name=self.driver_name,
        )

    def display_name(self) -> str:
        return self.driver_name if self.driver_name else f"Vehicle {self.id}"

    def __str__(self) -> str:
        return (f"{self.display_name()} (capacity={self.capacity}, "
                f"passengers={len(self.assigned_passengers)}, "
                f"distance={self.total_distance:.2f}km)")


class Solution:
    """One candidate assignment of passengers to vehicles (GA individual)"""

    def __init__(self, vehicles: Optional[List[Vehicle]] = None, score: float = -math.inf):
        """Initialize solution

        Args:
            vehicles: Vehicles owned by this solution (not copied)
            score: Fitness score, higher is better
        """
        self.vehicles = vehicles if vehicles is not None else []
        self.score = score

        # Metadata
        self.generation = 0                # Generation when created
        self.creation_method = "unknown"   # How solution was created

    @classmethod
    def empty(cls) -> 'Solution':
        """Solution returned for infeasible input (no passengers or no vehicles)"""
        return cls(vehicles=[], score=0.0)

    def clone(self) -> 'Solution':
        """Create a deep copy of the solution (vehicles and assignment lists)"""
        cloned = Solution([vehicle.copy() for vehicle in self.vehicles], self.score)
        cloned.generation = self.generation
        cloned.creation_method = self.creation_method
        return cloned

    def assigned_passenger_ids(self) -> List[int]:
        """Passenger ids in vehicle order, duplicates included"""
        return [p.id for vehicle in self.vehicles for p in vehicle.assigned_passengers]

    def passenger_count(self) -> int:
        return sum(len(vehicle.assigned_passengers) for vehicle in self.vehicles)

    def has_capacity_overload(self) -> bool:
        return any(vehicle.is_overloaded for vehicle in self.vehicles)

    def total_distance(self) -> float:
        return sum(vehicle.total_distance for vehicle in self.vehicles)

    def find_vehicle(self, vehicle_id: int) -> Optional[Vehicle]:
        for vehicle in self.vehicles:
            if vehicle.id == vehicle_id:
                return vehicle
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Serializable view: vehicle -> ordered passenger ids"""
        return {
            'score': self.score,
            'vehicles': [
                {
                    'id': vehicle.id,
                    'driver_name': vehicle.driver_name,
                    'capacity': vehicle.capacity,
                    'total_distance_km': vehicle.total_distance,
                    'passenger_ids': [p.id for p in vehicle.assigned_passengers],
                }
                for vehicle in self.vehicles
            ],
        }

    def __str__(self) -> str:
        score_str = f"{self.score:.3f}" if math.isfinite(self.score) else str(self.score)
        return (f"Solution(vehicles={len(self.vehicles)}, "
                f"passengers={self.passenger_count()}, "
                f"score={score_str})")

    def __repr__(self) -> str:
        return self.__str__()


@dataclass(frozen=True)
class Destination:
    """Shared destination and target arrival time (minutes since midnight)"""
    latitude: float
    longitude: float
    target_time_minutes: int = 8 * 60


@dataclass(frozen=True)
class ProblemData:
    """Read-only snapshot of one optimization run's input"""
    passengers: Tuple[Passenger, ...]
    vehicles: Tuple[Vehicle, ...]
    destination: Destination

    def __post_init__(self):
        # Freeze the collections and take private copies of the vehicle templates
        object.__setattr__(self, 'passengers', tuple(self.passengers))
        object.__setattr__(self, 'vehicles', tuple(v.empty_copy() for v in self.vehicles))
        self._validate()

    @classmethod
    def create(cls, passengers: Optional[Sequence[Passenger]], vehicles: Optional[Sequence[Vehicle]],
               destination_lat: float, destination_lng: float, target_time) -> 'ProblemData':
        """Build problem data from the optimizer's call arguments"""
        destination = Destination(float(destination_lat), float(destination_lng),
                                  parse_time_of_day(target_time))
        return cls(tuple(passengers or ()), tuple(vehicles or ()), destination)

    def _validate(self):
        """Raise ProblemDataError on malformed coordinates, ids, capacities or target time"""
        if not is_valid_location(self.destination.latitude, self.destination.longitude):
            raise ProblemDataError(
                f"Invalid destination coordinates: "
                f"({self.destination.latitude}, {self.destination.longitude})")
        if not (0 <= self.destination.target_time_minutes < 24 * 60):
            raise ProblemDataError(
                f"Target time out of range: {self.destination.target_time_minutes}")

        seen_passengers: Set[int] = set()
        for passenger in self.passengers:
            if passenger.id in seen_passengers:
                raise ProblemDataError(f"Duplicate passenger id: {passenger.id}")
            seen_passengers.add(passenger.id)
            if not is_valid_location(passenger.latitude, passenger.longitude):
                raise ProblemDataError(
                    f"Invalid coordinates for passenger {passenger.id}: "
                    f"({passenger.latitude}, {passenger.longitude})")

        seen_vehicles: Set[int] = set()
        for vehicle in self.vehicles:
            if vehicle.id in seen_vehicles:
                raise ProblemDataError(f"Duplicate vehicle id: {vehicle.id}")
            seen_vehicles.add(vehicle.id)
            if isinstance(vehicle.capacity, bool) or not isinstance(vehicle.capacity, int) \
                    or vehicle.capacity <= 0:
                raise ProblemDataError(
                    f"Vehicle {vehicle.id} capacity must be a positive integer, "
                    f"got {vehicle.capacity!r}")
            if not is_valid_location(vehicle.start_latitude, vehicle.start_longitude):
                raise ProblemDataError(
                    f"Invalid start coordinates for vehicle {vehicle.id}: "
                    f"({vehicle.start_latitude}, {vehicle.start_longitude})")

    @property
    def destination_lat(self) -> float:
        return self.destination.latitude

    @property
    def destination_lng(self) -> float:
        return self.destination.longitude

    @property
    def target_time(self) -> int:
        return self.destination.target_time_minutes

    @property
    def total_capacity(self) -> int:
        return sum(vehicle.capacity for vehicle in self.vehicles)

    @property
    def min_capacity(self) -> int:
        return min(vehicle.capacity for vehicle in self.vehicles) if self.vehicles else 0

    @property
    def is_empty(self) -> bool:
        """No passengers or no vehicles: the algorithm does not run"""
        return not self.passengers or not self.vehicles

    def passenger_by_id(self) -> Dict[int, Passenger]:
        return {passenger.id: passenger for passenger in self.passengers}
