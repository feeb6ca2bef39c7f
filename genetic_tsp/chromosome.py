#!/usr/bin/env python3
"""
Genetic Algorithm Chromosome Classes
City and Route (tour) representation for TSP optimization
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from .common import InvalidRouteError
from .distance import DistanceOracle


@dataclass(frozen=True)
class City:
    """Immutable city; equality and hashing use ``id`` only"""
    id: str
    name: str = field(compare=False)
    x: float = field(default=0.0, compare=False)
    y: float = field(default=0.0, compare=False)

    def __str__(self) -> str:
        return self.name


# Default city layout: id -> (x, y). Coordinates are display-only.
DEFAULT_CITY_COORDINATES: Dict[str, Tuple[float, float]] = {
    "F": (100, 300),
    "G": (400, 100),
    "H": (350, 250),
    "E": (300, 200),
    "K": (250, 150),
    "N": (150, 200),
    "C": (200, 250),
    "L": (150, 300),
}


def create_default_cities() -> Dict[str, City]:
    """Build the default city map (id -> City)"""
    return {
        city_id: City(city_id, city_id, float(x), float(y))
        for city_id, (x, y) in DEFAULT_CITY_COORDINATES.items()
    }


class Route:
    """Closed tour: start city -> cities... -> start city (GA chromosome)

    The start city is fixed and not part of the sequence. The sequence is
    only changed through ``set_city``, which clears the cached distance and
    fitness.
    """

    def __init__(self, start_city: City, cities: Iterable[City], oracle: DistanceOracle):
        """Initialize route

        Args:
            start_city: Fixed start and end of the tour
            cities: Visiting order of every other city
            oracle: Distance table used for scoring

        Raises:
            InvalidRouteError: If the sequence repeats a city or contains the start city
        """
        self._start_city = start_city
        self._cities: List[City] = list(cities)
        self.oracle = oracle

        if len(set(self._cities)) != len(self._cities):
            raise InvalidRouteError(f"Route contains duplicate cities: {self._names()}")
        if start_city in self._cities:
            raise InvalidRouteError(
                f"Start city {start_city.id} must not appear in the route sequence"
            )

        # Cached metrics
        self._distance: Optional[float] = None
        self._fitness: Optional[float] = None

    @property
    def start_city(self) -> City:
        return self._start_city

    @property
    def cities(self) -> Tuple[City, ...]:
        """Read-only view of the visiting order"""
        return tuple(self._cities)

    def get_city(self, index: int) -> City:
        return self._cities[index]

    def set_city(self, index: int, city: City) -> None:
        """Overwrite one position and invalidate cached metrics"""
        self._cities[index] = city
        self._invalidate_cache()

    def _invalidate_cache(self) -> None:
        self._distance = None
        self._fitness = None

    def __len__(self) -> int:
        return len(self._cities)

    def __iter__(self):
        return iter(self._cities)

    def __lt__(self, other: 'Route') -> bool:
        return self.total_distance < other.total_distance

    @property
    def total_distance(self) -> float:
        """Edge sum around the closed loop"""
        if self._distance is None:
            self._distance = self._calculate_total_distance()
        return self._distance

    @property
    def fitness(self) -> float:
        """Reciprocal distance; 0 for zero, infinite or NaN distances"""
        if self._fitness is None:
            distance = self.total_distance
            if distance == 0 or math.isinf(distance) or math.isnan(distance):
                self._fitness = 0.0
            else:
                self._fitness = 1.0 / distance
        return self._fitness

    def _calculate_total_distance(self) -> float:
        if not self._cities:
            return 0.0

        distance = self.oracle.distance(self._start_city, self._cities[0])
        for i in range(len(self._cities) - 1):
            distance += self.oracle.distance(self._cities[i], self._cities[i + 1])
        distance += self.oracle.distance(self._cities[-1], self._start_city)
        return distance

    def contains_city(self, city: City) -> bool:
        return city in self._cities

    def is_permutation_of(self, cities: Sequence[City]) -> bool:
        """Check that the route visits exactly ``cities``, each once"""
        return len(self._cities) == len(cities) and set(self._cities) == set(cities)

    def city_names(self) -> List[str]:
        """City names of the full closed tour, start city at both ends"""
        return [self._start_city.name] + self._names() + [self._start_city.name]

    def _names(self) -> List[str]:
        return [city.name for city in self._cities]

    def copy(self) -> 'Route':
        """Copy the sequence; cached metrics carry over since geometry is identical"""
        new_route = Route.__new__(Route)
        new_route._start_city = self._start_city
        new_route._cities = list(self._cities)
        new_route.oracle = self.oracle
        new_route._distance = self._distance
        new_route._fitness = self._fitness
        return new_route

    def to_dict(self) -> Dict[str, Any]:
        return {
            'cities': self.city_names(),
            'total_distance': self.total_distance,
            'fitness': self.fitness,
        }

    def __str__(self) -> str:
        return f"{' -> '.join(self.city_names())} (Distance: {self.total_distance:.2f})"

    def __repr__(self) -> str:
        return f"Route({self.__str__()})"
