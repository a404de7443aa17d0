#!/usr/bin/env python3
"""
Problem Loader
Reads a problem instance (destination, passengers, vehicles, optional GA config) from JSON or YAML
"""

import json
import logging
from typing import Dict, Any, List, Optional, Tuple

import yaml

from .common import ConfigurationError, ProblemDataError
from .config import GeneticAlgorithmConfig, read_structured_file
from .models import Passenger, ProblemData, Vehicle

logger = logging.getLogger(__name__)


def load_problem(path: str) -> Tuple[ProblemData, Optional[GeneticAlgorithmConfig]]:
    """Load a problem file

    Expected layout::

        destination: {latitude, longitude, target_time}   # minutes or "HH:MM"
        passengers: [{id, name, latitude, longitude, address?}]
        vehicles: [{id, capacity, start_latitude, start_longitude, start_address?, driver_name?}]
        config: {...}                                      # optional GA parameters

    Returns:
        Validated problem data and the embedded configuration, if any

    Raises:
        FileNotFoundError: If the file does not exist
        ProblemDataError: If the file cannot be parsed or is malformed
        ConfigurationError: If the embedded configuration is invalid
    """
    try:
        data = read_structured_file(path)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ProblemDataError(f"Cannot parse problem file {path}: {e}") from e
    except ConfigurationError as e:
        raise ProblemDataError(str(e)) from e

    problem = problem_from_dict(data)
    config = GeneticAlgorithmConfig.from_dict(data['config']) if data.get('config') else None

    logger.info(f"Loaded problem from {path}: {len(problem.passengers)} passengers, "
                f"{len(problem.vehicles)} vehicles")
    return problem, config


def problem_from_dict(data: Dict[str, Any]) -> ProblemData:
    """Build validated problem data from a parsed mapping"""
    destination = data.get('destination')
    if not isinstance(destination, dict):
        raise ProblemDataError("Problem is missing a 'destination' mapping")

    try:
        return ProblemData.create(
            passengers=_parse_passengers(data.get('passengers') or []),
            vehicles=_parse_vehicles(data.get('vehicles') or []),
            destination_lat=destination['latitude'],
            destination_lng=destination['longitude'],
            target_time=destination.get('target_time', 8 * 60),
        )
    except KeyError as e:
        raise ProblemDataError(f"Destination is missing field {e}") from e
    except (TypeError, ValueError) as e:
        if isinstance(e, ProblemDataError):
            raise
        raise ProblemDataError(f"Invalid destination: {e}") from e


def _parse_passengers(entries: List[Dict[str, Any]]) -> List[Passenger]:
    passengers = []
    for index, entry in enumerate(entries):
        try:
            passengers.append(Passenger(
                id=int(entry['id']),
                name=str(entry.get('name', f"Passenger {entry['id']}")),
                latitude=float(entry['latitude']),
                longitude=float(entry['longitude']),
                address=entry.get('address'),
            ))
        except (KeyError, TypeError, ValueError) as e:
            raise ProblemDataError(f"Invalid passenger entry #{index}: {e}") from e
    return passengers


def _parse_vehicles(entries: List[Dict[str, Any]]) -> List[Vehicle]:
    vehicles = []
    for index, entry in enumerate(entries):
        try:
            vehicles.append(Vehicle(
                id=int(entry['id']),
                capacity=entry['capacity'],
                start_latitude=float(entry['start_latitude']),
                start_longitude=float(entry['start_longitude']),
                start_address=entry.get('start_address'),
                driver_name=entry.get('driver_name'),
            ))
        except (KeyError, TypeError, ValueError) as e:
            raise ProblemDataError(f"Invalid vehicle entry #{index}: {e}") from e
    return vehicles
