#!/usr/bin/env python3
"""
GA Configuration
Run parameters for the ride-sharing genetic algorithm, with JSON/YAML loading
"""

import json
import os
import random
import logging
from dataclasses import dataclass, field, fields
from typing import Dict, Any, Optional

import yaml

from .common import (
    ConfigurationError,
    DEFAULT_POPULATION_SIZE, DEFAULT_MUTATION_RATE, DEFAULT_ELITISM_RATE,
    DEFAULT_TOURNAMENT_SIZE, DEFAULT_MAX_GENERATIONS_WITHOUT_IMPROVEMENT
)

logger = logging.getLogger(__name__)

MIN_POPULATION_SIZE = 50


@dataclass(frozen=True)
class GeneticAlgorithmConfig:
    """Configuration for genetic algorithm (immutable once created)"""
    population_size: int = DEFAULT_POPULATION_SIZE
    mutation_rate: float = DEFAULT_MUTATION_RATE
    elitism_rate: float = DEFAULT_ELITISM_RATE
    tournament_size: int = DEFAULT_TOURNAMENT_SIZE
    max_generations_without_improvement: int = DEFAULT_MAX_GENERATIONS_WITHOUT_IMPROVEMENT
    seed: Optional[int] = None  # Fixed seed makes a run replayable

    # Move mutation may push a vehicle over capacity; set False to forbid that
    allow_capacity_increasing_moves: bool = True

    rng: random.Random = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'population_size', max(int(self.population_size), MIN_POPULATION_SIZE))
        object.__setattr__(self, 'rng', random.Random(self.seed))
        self.validate()

    def validate(self) -> bool:
        """Validate configuration parameters

        Raises:
            ConfigurationError: If any parameter is out of range
        """
        if not 0.0 <= self.mutation_rate <= 1.0:
            raise ConfigurationError(f"mutation_rate must be within [0, 1], got {self.mutation_rate}")
        if not 0.0 <= self.elitism_rate <= 1.0:
            raise ConfigurationError(f"elitism_rate must be within [0, 1], got {self.elitism_rate}")
        if self.tournament_size < 1:
            raise ConfigurationError(f"tournament_size must be at least 1, got {self.tournament_size}")
        if self.max_generations_without_improvement < 1:
            raise ConfigurationError(
                "max_generations_without_improvement must be at least 1, "
                f"got {self.max_generations_without_improvement}")
        return True

    @property
    def elite_count(self) -> int:
        return int(self.population_size * self.elitism_rate)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'GeneticAlgorithmConfig':
        """Create configuration from a mapping, ignoring unknown keys"""
        data = dict(data or {})
        known = {f.name for f in fields(cls) if f.init}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown configuration keys: {', '.join(unknown)}")
        try:
            return cls(**{key: value for key, value in data.items() if key in known})
        except (TypeError, ValueError) as e:
            if isinstance(e, ConfigurationError):
                raise
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self) if f.init}

    def with_overrides(self, **overrides) -> 'GeneticAlgorithmConfig':
        """Return a new configuration (with a fresh generator) with some values replaced"""
        data = self.to_dict()
        data.update({key: value for key, value in overrides.items() if value is not None})
        return GeneticAlgorithmConfig.from_dict(data)


def read_structured_file(path: str) -> Dict[str, Any]:
    """Read a JSON or YAML mapping, format chosen by file extension"""
    if not os.path.exists(path):
        raise FileNotFoundError(f"File not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        if path.endswith('.yaml') or path.endswith('.yml'):
            data = yaml.safe_load(f)
        else:
            data = json.load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Expected a mapping at the top level of {path}")
    return data


def load_config(path: str) -> GeneticAlgorithmConfig:
    """Load a GA configuration file (JSON or YAML)

    The mapping may be the parameters themselves or nested under a
    ``genetic_algorithm`` key.
    """
    data = read_structured_file(path)
    if 'genetic_algorithm' in data:
        data = data['genetic_algorithm'] or {}
    config = GeneticAlgorithmConfig.from_dict(data)
    logger.info(f"Loaded GA configuration from {path}")
    return config


def save_config(config: GeneticAlgorithmConfig, path: str) -> str:
    """Write configuration to JSON or YAML"""
    with open(path, 'w', encoding='utf-8') as f:
        if path.endswith('.yaml') or path.endswith('.yml'):
            yaml.dump({'genetic_algorithm': config.to_dict()}, f, indent=2, default_flow_style=False)
        else:
            json.dump({'genetic_algorithm': config.to_dict()}, f, indent=2)
    return path
