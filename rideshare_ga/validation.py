#!/usr/bin/env python3
"""
Solution Validation
Checks a solution against the passenger list and vehicle capacities
"""

from dataclasses import dataclass, field
from typing import List, Sequence

from .common import safe_divide
from .models import Passenger, Solution


@dataclass
class ValidationReport:
    """Outcome of validating one solution"""
    assigned_ids: List[int] = field(default_factory=list)
    unassigned_ids: List[int] = field(default_factory=list)
    duplicate_ids: List[int] = field(default_factory=list)
    unknown_ids: List[int] = field(default_factory=list)
    overloaded_vehicle_ids: List[int] = field(default_factory=list)
    total_passengers: int = 0
    total_distance: float = 0.0
    total_time: float = 0.0
    used_vehicles: int = 0

    @property
    def is_valid(self) -> bool:
        """No passenger appears twice and every assigned passenger is known"""
        return not self.duplicate_ids and not self.unknown_ids

    @property
    def is_complete(self) -> bool:
        return self.is_valid and not self.unassigned_ids

    @property
    def is_feasible(self) -> bool:
        return self.is_complete and not self.overloaded_vehicle_ids

    @property
    def average_time(self) -> float:
        return safe_divide(self.total_time, self.used_vehicles)

    def summary(self) -> str:
        lines = ["Validation Results:"]
        lines.append(f"All passengers assigned: {not self.unassigned_ids}")
        lines.append(f"Assigned passengers: {len(self.assigned_ids)}/{self.total_passengers}")
        lines.append(f"Capacity exceeded: {bool(self.overloaded_vehicle_ids)}")
        if self.overloaded_vehicle_ids:
            lines.append(f"Overloaded vehicles: {', '.join(map(str, self.overloaded_vehicle_ids))}")
        if self.duplicate_ids:
            lines.append(f"Passengers with multiple assignments: {len(self.duplicate_ids)}")
            lines.append(f"IDs: {', '.join(map(str, self.duplicate_ids))}")
        if self.unknown_ids:
            lines.append(f"Unknown passenger IDs: {', '.join(map(str, self.unknown_ids))}")
        lines.append("")
        lines.append("Statistics:")
        lines.append(f"Used vehicles: {self.used_vehicles}")
        lines.append(f"Total distance: {self.total_distance:.2f} km")
        lines.append(f"Total time: {self.total_time:.2f} minutes")
        lines.append(f"Average time per vehicle: {self.average_time:.2f} minutes")
        return "\n".join(lines)


class SolutionValidator:
    """Validates solutions against constraints"""

    def validate(self, solution: Solution, passengers: Sequence[Passenger]) -> ValidationReport:
        """Build a validation report

        Args:
            solution: Solution to check (not modified)
            passengers: The full passenger list of the problem

        Returns:
            ValidationReport listing every problem found
        """
        known_ids = {p.id for p in passengers}
        report = ValidationReport(total_passengers=len(known_ids))

        seen = set()
        for vehicle in solution.vehicles:
            if vehicle.is_overloaded:
                report.overloaded_vehicle_ids.append(vehicle.id)
            if vehicle.assigned_passengers:
                report.used_vehicles += 1
            report.total_distance += vehicle.total_distance
            report.total_time += vehicle.total_time

            for passenger in vehicle.assigned_passengers:
                if passenger.id in seen:
                    if passenger.id not in report.duplicate_ids:
                        report.duplicate_ids.append(passenger.id)
                    continue
                seen.add(passenger.id)
                if passenger.id in known_ids:
                    report.assigned_ids.append(passenger.id)
                else:
                    report.unknown_ids.append(passenger.id)

        report.unassigned_ids = [p.id for p in passengers if p.id not in seen]
        return report
