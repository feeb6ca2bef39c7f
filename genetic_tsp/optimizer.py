#!/usr/bin/env python3
"""
Genetic Algorithm TSP Optimizer
Main genetic algorithm engine: population lifecycle, generation loop and run history
"""

import logging
import random
import time
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple

from .chromosome import City, Route, create_default_cities
from .common import (
    GAExecutionError, PopulationNotInitializedError, TOP_ROUTES_PER_GENERATION,
)
from .config import GAConfig
from .distance import DistanceOracle
from .operators import GAOperators
from .population import Population, PopulationInitializer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationResult:
    """Snapshot of one generation"""
    generation: int
    best_route: Route
    best_distance: float
    average_distance: float
    worst_distance: float
    top_routes: Tuple[Route, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'generation': self.generation,
            'best_route': self.best_route.city_names(),
            'best_distance': self.best_distance,
            'average_distance': self.average_distance,
            'worst_distance': self.worst_distance,
            'top_routes': [route.to_dict() for route in self.top_routes],
        }


@dataclass(frozen=True)
class GAExecutionResult:
    """Results from a complete genetic algorithm run"""
    best_route: Route
    best_distance: float
    total_generations: int
    generation_history: Tuple[GenerationResult, ...]
    config: GAConfig
    execution_time_ms: float

    def improvement(self) -> float:
        """Best distance gained between generation 0 and the final population"""
        if not self.generation_history:
            return 0.0
        return self.generation_history[0].best_distance - self.best_distance

    def to_dict(self, include_history: bool = True) -> Dict[str, Any]:
        result = {
            'best_route': self.best_route.city_names(),
            'best_distance': self.best_distance,
            'total_generations': self.total_generations,
            'execution_time_ms': self.execution_time_ms,
            'improvement': self.improvement(),
            'config': self.config.to_dict(),
        }
        if include_history:
            result['generation_history'] = [gen.to_dict() for gen in self.generation_history]
        return result


class GeneticTSPOptimizer:
    """Genetic algorithm engine for the travelling salesman problem

    One instance owns one population and one history; it is not safe to
    drive the same instance from several threads.
    """

    def __init__(self, cities: Optional[Dict[str, City]] = None,
                 oracle: Optional[DistanceOracle] = None,
                 rng: Optional[random.Random] = None):
        """Initialize the engine

        Args:
            cities: Registered cities (id -> City); the default 8-city graph when omitted
            oracle: Distance table; the default edge list when omitted
            rng: Random source shared with the operators
        """
        self._cities: Dict[str, City] = dict(cities) if cities is not None else create_default_cities()
        self.oracle = oracle or DistanceOracle()
        self.rng = rng or random.Random()
        self.operators = GAOperators(self.rng)

        # Evolution state
        self.current_config: Optional[GAConfig] = None
        self.current_population: Optional[Population] = None
        self.history: List[GenerationResult] = []

        logger.info(f"Graph initialized with {len(self._cities)} cities")

    def initialize_population(self, config: GAConfig) -> Population:
        """Seed a fresh random population and clear the history

        Raises:
            ConfigurationError: If the start city is unknown
        """
        logger.info(f"Initializing population: {config}")

        if config.random_seed is not None:
            self.rng.seed(config.random_seed)

        initializer = PopulationInitializer(self._cities, config.start_city_id,
                                            self.oracle, self.rng)
        population = initializer.create_population(config.population_size)

        self.current_config = config
        self.current_population = population
        self.history = []

        logger.info(f"Initial population: {len(population)} routes, "
                    f"best distance: {population.get_best_distance():.2f}")
        return population

    def evolve_generation(self, generation_number: int) -> GenerationResult:
        """Advance the current population by one generation

        Raises:
            PopulationNotInitializedError: If called before initialize_population
        """
        if self.current_population is None or self.current_config is None:
            raise PopulationNotInitializedError("Population not initialized")

        config = self.current_config
        operators = self.operators
        new_population = Population()

        for elite in operators.elite_selection(self.current_population, config.elitism_count):
            new_population.add_route(elite)

        while len(new_population) < config.population_size:
            parent1, parent2 = operators.select_parents(
                self.current_population, config.selection_method, config.tournament_size
            )

            if self.rng.random() < config.crossover_probability:
                offspring1, offspring2 = operators.pmx_crossover(
                    parent1, parent2, config.crossover_point1, config.crossover_point2
                )
            else:
                offspring1, offspring2 = parent1.copy(), parent2.copy()

            offspring1 = operators.mutate(offspring1, config.mutation_probability,
                                          config.mutation_method)
            offspring2 = operators.mutate(offspring2, config.mutation_probability,
                                          config.mutation_method)

            new_population.add_route(offspring1)
            if len(new_population) < config.population_size:
                new_population.add_route(offspring2)

        self.current_population = new_population
        result = self._snapshot(generation_number)
        self.history.append(result)

        logger.info(f"Generation {generation_number}: best={result.best_distance:.2f}, "
                    f"avg={result.average_distance:.2f}, worst={result.worst_distance:.2f}")
        return result

    def run_genetic_algorithm(self, config: GAConfig) -> GAExecutionResult:
        """Initialize, record generation 0, then evolve ``max_generations`` times

        Raises:
            GAExecutionError: Wrapping any failure; the original error is the cause
        """
        try:
            start_time = time.perf_counter()

            self.initialize_population(config)
            self.history.append(self._snapshot(0))

            for generation in range(1, config.max_generations + 1):
                self.evolve_generation(generation)

            execution_time_ms = (time.perf_counter() - start_time) * 1000.0
            best_route = self.current_population.get_best_route()

            logger.info(f"GA finished in {execution_time_ms:.0f}ms - best route: "
                        f"{best_route.city_names()} (distance: {best_route.total_distance:.2f})")

            return GAExecutionResult(
                best_route=best_route,
                best_distance=best_route.total_distance,
                total_generations=config.max_generations,
                generation_history=tuple(self.history),
                config=replace(config),
                execution_time_ms=execution_time_ms,
            )
        except Exception as e:
            logger.error(f"Error running GA: {e}")
            raise GAExecutionError(f"GA run failed: {e}") from e

    def _snapshot(self, generation_number: int) -> GenerationResult:
        population = self.current_population
        return GenerationResult(
            generation=generation_number,
            best_route=population.get_best_route(),
            best_distance=population.get_best_distance(),
            average_distance=population.get_average_distance(),
            worst_distance=population.get_worst_distance(),
            top_routes=tuple(population.get_top_routes(TOP_ROUTES_PER_GENERATION)),
        )

    def get_population_stats(self) -> Dict[str, Any]:
        """Summary of the current population

        Raises:
            PopulationNotInitializedError: If there is no population yet
        """
        if self.current_population is None:
            raise PopulationNotInitializedError("No population initialized")

        population = self.current_population
        return {
            'size': len(population),
            'best_distance': population.get_best_distance(),
            'average_distance': population.get_average_distance(),
            'worst_distance': population.get_worst_distance(),
            'best_route': population.get_best_route().city_names(),
        }

    def get_history(self) -> List[GenerationResult]:
        return list(self.history)

    def get_current_population(self) -> Optional[Population]:
        return self.current_population

    def get_cities(self) -> Dict[str, City]:
        return dict(self._cities)

    def set_cities(self, cities: Dict[str, City]) -> None:
        """Replace the registered cities

        Routes built from the previous city set are no longer comparable,
        so the current population and history are discarded.
        """
        self._cities = dict(cities)
        self.current_config = None
        self.current_population = None
        self.history = []
        logger.info(f"Graph updated: {len(self._cities)} cities")
