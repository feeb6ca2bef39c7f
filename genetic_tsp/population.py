#!/usr/bin/env python3
"""
GA Population
Route collection with lazy fitness sorting, and random population seeding
"""

import logging
import random
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from .chromosome import City, Route
from .common import ConfigurationError
from .distance import DistanceOracle

logger = logging.getLogger(__name__)


class Population:
    """Ordered collection of routes

    Sorting is ascending by total distance and is skipped while the
    collection is unchanged since the last sort.
    """

    def __init__(self, routes: Optional[Iterable[Route]] = None):
        self._routes: List[Route] = list(routes) if routes else []
        self._sorted = False

    def add_route(self, route: Route) -> None:
        self._routes.append(route)
        self._sorted = False

    def get_route(self, index: int) -> Route:
        return self._routes[index]

    def set_route(self, index: int, route: Route) -> None:
        self._routes[index] = route
        self._sorted = False

    def __len__(self) -> int:
        return len(self._routes)

    def __iter__(self):
        return iter(self._routes)

    @property
    def size(self) -> int:
        return len(self._routes)

    @property
    def routes(self) -> Tuple[Route, ...]:
        """Read-only view of all routes in current order"""
        return tuple(self._routes)

    @property
    def is_sorted(self) -> bool:
        return self._sorted

    def sort_by_fitness(self) -> None:
        """Sort best-first (ascending distance); no-op if already sorted"""
        if not self._sorted:
            self._routes.sort(key=lambda route: route.total_distance)
            self._sorted = True

    def get_best_route(self) -> Route:
        self._require_routes()
        self.sort_by_fitness()
        return self._routes[0]

    def get_worst_route(self) -> Route:
        self._require_routes()
        self.sort_by_fitness()
        return self._routes[-1]

    def get_best_distance(self) -> float:
        return self.get_best_route().total_distance

    def get_worst_distance(self) -> float:
        return self.get_worst_route().total_distance

    def get_top_routes(self, n: int) -> List[Route]:
        """Best ``min(n, size)`` routes"""
        self.sort_by_fitness()
        return list(self._routes[:max(0, min(n, len(self._routes)))])

    def get_average_distance(self) -> float:
        if not self._routes:
            return 0.0
        return float(np.mean([route.total_distance for route in self._routes]))

    def get_total_fitness(self) -> float:
        return sum(route.fitness for route in self._routes)

    def _require_routes(self) -> None:
        if not self._routes:
            raise ValueError("Population is empty")

    def __repr__(self) -> str:
        return f"Population(size={len(self._routes)}, sorted={self._sorted})"


class PopulationInitializer:
    """Creates initial populations of random tours"""

    def __init__(self, cities: Dict[str, City], start_city_id: str,
                 oracle: DistanceOracle, rng: Optional[random.Random] = None):
        """Initialize population creator

        Args:
            cities: Registered cities (id -> City)
            start_city_id: Id of the fixed start city
            oracle: Distance table handed to every route
            rng: Random source; a fresh unseeded one when omitted

        Raises:
            ConfigurationError: If the start city is not registered
        """
        self.start_city = cities.get(start_city_id)
        if self.start_city is None:
            raise ConfigurationError(f"Invalid start city: {start_city_id}")

        self.oracle = oracle
        self.rng = rng or random.Random()
        self.available_cities = [city for city in cities.values() if city != self.start_city]

    def create_random_route(self) -> Route:
        route_cities = list(self.available_cities)
        self.rng.shuffle(route_cities)
        return Route(self.start_city, route_cities, self.oracle)

    def create_population(self, size: int) -> Population:
        """Create ``size`` random permutations of the non-start cities"""
        if size < 1:
            raise ConfigurationError(f"Population size must be positive, got {size}")

        population = Population()
        for _ in range(size):
            population.add_route(self.create_random_route())

        logger.debug(f"Created {size} random routes from start city {self.start_city.id}")
        return population
