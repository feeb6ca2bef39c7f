#!/usr/bin/env python3
"""
GA Configuration
Run parameters, boundary validation, and JSON/YAML persistence
"""

import json
import logging
import numbers
import os
import re
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, List, Optional

import yaml

from .common import (
    ConfigurationError,
    DEFAULT_POPULATION_SIZE, DEFAULT_MAX_GENERATIONS, DEFAULT_CROSSOVER_RATE,
    DEFAULT_MUTATION_RATE, DEFAULT_ELITISM_COUNT, DEFAULT_GENERATION_GAP,
    DEFAULT_CROSSOVER_POINT_1, DEFAULT_CROSSOVER_POINT_2, DEFAULT_START_CITY,
    DEFAULT_TOURNAMENT_SIZE,
)
from .operators import MutationMethod, SelectionMethod

logger = logging.getLogger(__name__)

# Accepted parameter ranges (rates are percentage points)
MIN_POPULATION_SIZE = 100
CROSSOVER_RATE_RANGE = (60.0, 80.0)
MUTATION_RATE_RANGE = (0.5, 1.0)
ELITISM_COUNT_RANGE = (0, 20)
GENERATION_GAP_RANGE = (0.0, 100.0)
MIN_CROSSOVER_POINT_1 = 1
MIN_CROSSOVER_POINT_2 = 2

NUMERIC_FIELDS = (
    'population_size', 'crossover_rate', 'mutation_rate', 'max_generations',
    'elitism_count', 'generation_gap', 'crossover_point1', 'crossover_point2',
    'tournament_size',
)


@dataclass
class GAConfig:
    """Configuration for genetic algorithm"""
    population_size: int = DEFAULT_POPULATION_SIZE
    crossover_rate: float = DEFAULT_CROSSOVER_RATE    # percent
    mutation_rate: float = DEFAULT_MUTATION_RATE      # percent
    max_generations: int = DEFAULT_MAX_GENERATIONS
    elitism_count: int = DEFAULT_ELITISM_COUNT
    generation_gap: float = DEFAULT_GENERATION_GAP
    crossover_point1: int = DEFAULT_CROSSOVER_POINT_1
    crossover_point2: int = DEFAULT_CROSSOVER_POINT_2
    start_city_id: str = DEFAULT_START_CITY

    # Operator choice
    selection_method: SelectionMethod = SelectionMethod.TOURNAMENT
    mutation_method: MutationMethod = MutationMethod.SWAP
    tournament_size: int = DEFAULT_TOURNAMENT_SIZE
    random_seed: Optional[int] = None

    def __post_init__(self):
        if isinstance(self.selection_method, str):
            self.selection_method = _parse_enum(SelectionMethod, self.selection_method)
        if isinstance(self.mutation_method, str):
            self.mutation_method = _parse_enum(MutationMethod, self.mutation_method)

    @property
    def crossover_probability(self) -> float:
        return self.crossover_rate / 100.0

    @property
    def mutation_probability(self) -> float:
        return self.mutation_rate / 100.0

    def validation_errors(self) -> List[str]:
        """Every rule the configuration breaks, empty when valid"""
        # Range checks need numbers
        errors = [
            f"{name} must be a number, got {getattr(self, name)!r}"
            for name in NUMERIC_FIELDS
            if isinstance(getattr(self, name), bool)
            or not isinstance(getattr(self, name), numbers.Real)
        ]
        if errors:
            return errors

        if self.population_size < MIN_POPULATION_SIZE:
            errors.append(f"population_size must be >= {MIN_POPULATION_SIZE}")
        if not CROSSOVER_RATE_RANGE[0] <= self.crossover_rate <= CROSSOVER_RATE_RANGE[1]:
            errors.append("crossover_rate must be between %.0f and %.0f percent" % CROSSOVER_RATE_RANGE)
        if not MUTATION_RATE_RANGE[0] <= self.mutation_rate <= MUTATION_RATE_RANGE[1]:
            errors.append("mutation_rate must be between %.1f and %.1f percent" % MUTATION_RATE_RANGE)
        if self.max_generations < 1:
            errors.append("max_generations must be >= 1")
        if not ELITISM_COUNT_RANGE[0] <= self.elitism_count <= ELITISM_COUNT_RANGE[1]:
            errors.append("elitism_count must be between %d and %d" % ELITISM_COUNT_RANGE)
        if not GENERATION_GAP_RANGE[0] <= self.generation_gap <= GENERATION_GAP_RANGE[1]:
            errors.append("generation_gap must be between %.0f and %.0f" % GENERATION_GAP_RANGE)
        if self.crossover_point1 < MIN_CROSSOVER_POINT_1:
            errors.append(f"crossover_point1 must be >= {MIN_CROSSOVER_POINT_1}")
        if self.crossover_point2 < MIN_CROSSOVER_POINT_2:
            errors.append(f"crossover_point2 must be >= {MIN_CROSSOVER_POINT_2}")
        if self.crossover_point1 >= self.crossover_point2:
            errors.append("crossover_point1 must be smaller than crossover_point2")
        if self.tournament_size < 1:
            errors.append("tournament_size must be >= 1")
        if not self.start_city_id:
            errors.append("start_city_id must not be empty")

        return errors

    def validate(self) -> None:
        """Check the configuration against the accepted ranges

        Raises:
            ConfigurationError: Listing every violated rule
        """
        errors = self.validation_errors()
        if errors:
            raise ConfigurationError("Invalid GA configuration: " + "; ".join(errors))

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['selection_method'] = self.selection_method.value
        data['mutation_method'] = self.mutation_method.value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GAConfig':
        """Build a config from snake_case or camelCase keys

        Raises:
            ConfigurationError: On unknown keys
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        unknown = []
        for key, value in data.items():
            name = _to_snake_case(key)
            if name in known:
                kwargs[name] = value
            else:
                unknown.append(key)

        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
        return cls(**kwargs)


def _to_snake_case(name: str) -> str:
    return re.sub(r'(?<=[a-z0-9])([A-Z])', r'_\1', name).lower()


def _parse_enum(enum_cls, value: str):
    try:
        return enum_cls(value.lower())
    except ValueError:
        choices = ', '.join(member.value for member in enum_cls)
        raise ConfigurationError(
            f"Unknown {enum_cls.__name__} '{value}' (expected one of: {choices})"
        ) from None


def load_config(path: str) -> GAConfig:
    """Load a GAConfig from a JSON or YAML file"""
    extension = os.path.splitext(path)[1].lower()

    with open(path, 'r') as f:
        if extension == '.json':
            data = json.load(f)
        elif extension in ('.yaml', '.yml'):
            data = yaml.safe_load(f)
        else:
            raise ConfigurationError(f"Unsupported config file format: {extension}")

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")

    logger.info(f"Loaded GA configuration from {path}")
    return GAConfig.from_dict(data)


def save_config(config: GAConfig, path: str) -> None:
    """Write a GAConfig to a JSON or YAML file"""
    extension = os.path.splitext(path)[1].lower()
    data = config.to_dict()

    with open(path, 'w') as f:
        if extension == '.json':
            json.dump(data, f, indent=2)
        elif extension in ('.yaml', '.yml'):
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
        else:
            raise ConfigurationError(f"Unsupported config file format: {extension}")

    logger.info(f"Saved GA configuration to {path}")
