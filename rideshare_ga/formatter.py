#!/usr/bin/env python3
"""
Solution Formatter
Formats optimized assignments for different output formats (CLI, JSON)
"""

import math
from typing import Dict, Any, Optional

from .fitness import ScoreBreakdown
from .models import ProblemData, Solution


def format_minutes(decimal_minutes: float) -> str:
    """Convert decimal minutes to "M:SS" (e.g. 31.9 -> "31:54")"""
    minutes = int(math.floor(decimal_minutes))
    seconds = int(round((decimal_minutes - minutes) * 60))
    if seconds == 60:
        minutes += 1
        seconds = 0
    return f"{minutes}:{seconds:02d}"


def format_time_of_day(minutes_since_midnight: int) -> str:
    return f"{minutes_since_midnight // 60:02d}:{minutes_since_midnight % 60:02d}"


class SolutionFormatter:
    """Formats solutions for different presentation contexts"""

    format_minutes = staticmethod(format_minutes)

    def format_solution_cli(self, solution: Solution, problem: ProblemData,
                            breakdown: Optional[ScoreBreakdown] = None) -> str:
        """Format a solution for CLI output

        Args:
            solution: Solution returned by the optimizer
            problem: Problem the solution belongs to
            breakdown: Optional score breakdown to append

        Returns:
            Formatted string for CLI display
        """
        if not solution.vehicles:
            return "No assignment produced (no passengers or no vehicles)"

        lines = []
        lines.append("Ride-Sharing Assignment:")
        lines.append("=" * 50)
        lines.append(f"Destination:     ({problem.destination_lat:.5f}, {problem.destination_lng:.5f})")
        lines.append(f"Target Arrival:  {format_time_of_day(problem.target_time)}")
        lines.append(f"Score:           {solution.score:.3f}")
        lines.append(f"Total Distance:  {solution.total_distance():.2f} km")
        lines.append(f"Passengers:      {solution.passenger_count()}/{len(problem.passengers)} assigned")

        for vehicle in solution.vehicles:
            lines.append("")
            overload = "  [OVERLOADED]" if vehicle.is_overloaded else ""
            # Drive time is only known once a routing collaborator has filled it in
            drive_time = f", {format_minutes(vehicle.total_time)} min" if vehicle.total_time > 0 else ""
            lines.append(f"{vehicle.display_name()} "
                         f"({len(vehicle.assigned_passengers)}/{vehicle.capacity} seats, "
                         f"{vehicle.total_distance:.2f} km{drive_time}){overload}")
            if vehicle.departure_time:
                lines.append(f"   Departs at {vehicle.departure_time}")
            if not vehicle.assigned_passengers:
                lines.append("   (unused)")
            for position, passenger in enumerate(vehicle.assigned_passengers, 1):
                pickup = f" at {passenger.estimated_pickup_time}" if passenger.estimated_pickup_time else ""
                lines.append(f"  {position:2d}. {passenger}{pickup}")

        if breakdown is not None:
            lines.append("")
            lines.append("Score Breakdown:")
            lines.append(f"Distance:        {breakdown.distance_score:+.3f}")
            lines.append(f"Assignment:      {breakdown.assignment_score:+.1f}")
            lines.append(f"Vehicles Used:   {breakdown.vehicle_utilization_score:+.1f}")
            lines.append(f"Overload:        {breakdown.overload_penalty:+.1f}")
            lines.append(f"Capacity:        {breakdown.capacity_violation_penalty:+.1f}")
            lines.append(f"Unassigned:      {breakdown.unassigned_penalty:+.1f}")

        lines.append("=" * 50)
        return "\n".join(lines)

    def format_solution_dict(self, solution: Solution) -> Dict[str, Any]:
        """JSON-ready view of a solution"""
        data = solution.to_dict()
        data['total_distance_km'] = solution.total_distance()
        data['assigned_passengers'] = solution.passenger_count()
        data['has_capacity_overload'] = solution.has_capacity_overload()
        for entry, vehicle in zip(data['vehicles'], solution.vehicles):
            entry['overloaded'] = vehicle.is_overloaded
            entry['passengers'] = [
                {
                    'id': p.id,
                    'name': p.name,
                    'latitude': p.latitude,
                    'longitude': p.longitude,
                    'estimated_pickup_time': p.estimated_pickup_time,
                }
                for p in vehicle.assigned_passengers
            ]
        return data
