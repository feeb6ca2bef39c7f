#!/usr/bin/env python3
"""
Common Definitions for GA Components
Shared constants, logging helpers and the exception hierarchy
"""

import sys
import logging

# Common constants
DEFAULT_POPULATION_SIZE = 100
DEFAULT_MAX_GENERATIONS = 100
DEFAULT_CROSSOVER_RATE = 70.0    # percentage points
DEFAULT_MUTATION_RATE = 0.8      # percentage points
DEFAULT_ELITISM_COUNT = 5
DEFAULT_GENERATION_GAP = 0.9
DEFAULT_CROSSOVER_POINT_1 = 2
DEFAULT_CROSSOVER_POINT_2 = 5
DEFAULT_START_CITY = "F"
DEFAULT_TOURNAMENT_SIZE = 5
TOP_ROUTES_PER_GENERATION = 10

# Distance used for city pairs without a direct edge
INFINITE_DISTANCE = 999999.0

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level=logging.INFO):
    """Set up logging configuration"""
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )


def get_logger(name: str) -> logging.Logger:
    """Get logger with consistent configuration"""
    return logging.getLogger(name)


# Common exception classes
class GAError(Exception):
    """Base GA exception"""
    pass


class ConfigurationError(GAError, ValueError):
    """Invalid GA configuration (cut points, start city, parameter ranges)"""
    pass


class PopulationNotInitializedError(GAError, RuntimeError):
    """Engine used before a population was initialized"""
    pass


class InvalidRouteError(GAError, ValueError):
    """Route sequence is not a valid permutation"""
    pass


class GAExecutionError(GAError, RuntimeError):
    """A full GA run failed; the original exception is chained as __cause__"""
    pass


__all__ = [
    'DEFAULT_POPULATION_SIZE', 'DEFAULT_MAX_GENERATIONS', 'DEFAULT_CROSSOVER_RATE',
    'DEFAULT_MUTATION_RATE', 'DEFAULT_ELITISM_COUNT', 'DEFAULT_GENERATION_GAP',
    'DEFAULT_CROSSOVER_POINT_1', 'DEFAULT_CROSSOVER_POINT_2', 'DEFAULT_START_CITY',
    'DEFAULT_TOURNAMENT_SIZE', 'TOP_ROUTES_PER_GENERATION', 'INFINITE_DISTANCE',
    'LOG_FORMAT', 'setup_logging', 'get_logger',
    'GAError', 'ConfigurationError', 'PopulationNotInitializedError',
    'InvalidRouteError', 'GAExecutionError',
]
