#!/usr/bin/env python3
"""
Genetic TSP Package
Genetic algorithm solver for the travelling salesman problem on a fixed city graph
"""

# Core components
from .chromosome import City, Route, create_default_cities
from .distance import DistanceOracle, DEFAULT_EDGES
from .population import Population, PopulationInitializer
from .optimizer import GeneticTSPOptimizer, GenerationResult, GAExecutionResult

# Configuration
from .config import GAConfig, load_config, save_config

# Genetic operators
from .operators import GAOperators, SelectionMethod, MutationMethod

# Common utilities
from .common import (
    INFINITE_DISTANCE, setup_logging, get_logger,
    GAError, ConfigurationError, PopulationNotInitializedError,
    InvalidRouteError, GAExecutionError,
)

__version__ = "1.0.0"

__all__ = [
    # Core
    'City',
    'Route',
    'create_default_cities',
    'DistanceOracle',
    'DEFAULT_EDGES',
    'Population',
    'PopulationInitializer',
    'GeneticTSPOptimizer',
    'GenerationResult',
    'GAExecutionResult',

    # Configuration
    'GAConfig',
    'load_config',
    'save_config',

    # Operators
    'GAOperators',
    'SelectionMethod',
    'MutationMethod',

    # Common
    'INFINITE_DISTANCE',
    'setup_logging',
    'get_logger',
    'GAError',
    'ConfigurationError',
    'PopulationNotInitializedError',
    'InvalidRouteError',
    'GAExecutionError',
]
