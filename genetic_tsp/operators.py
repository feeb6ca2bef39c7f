#!/usr/bin/env python3
"""
Genetic Algorithm Operators
Implements selection, PMX crossover, and mutation operators for TSP routes
"""

import random
from enum import Enum
from typing import Dict, List, Optional, Set, Tuple

from .chromosome import City, Route
from .common import ConfigurationError, InvalidRouteError, DEFAULT_TOURNAMENT_SIZE
from .population import Population


class SelectionMethod(Enum):
    """Parent selection strategies"""
    TOURNAMENT = "tournament"
    ROULETTE = "roulette"
    RANK = "rank"
    SUS = "sus"


class MutationMethod(Enum):
    """Route mutation strategies"""
    SWAP = "swap"
    INVERSION = "inversion"
    SCRAMBLE = "scramble"


class GAOperators:
    """Collection of genetic algorithm operators for TSP routes

    Operators never modify a parent route; offspring and mutants are new
    Route objects. All randomness comes from ``self.rng``.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        """Initialize genetic operators

        Args:
            rng: Random source shared by every operator
        """
        self.rng = rng or random.Random()

    # =============================================================================
    # SELECTION OPERATORS
    # =============================================================================

    def elite_selection(self, population: Population, elite_count: int) -> List[Route]:
        """Best ``elite_count`` routes, returned as the same objects"""
        if elite_count <= 0:
            return []
        return population.get_top_routes(elite_count)

    def tournament_selection(self, population: Population,
                             tournament_size: int = DEFAULT_TOURNAMENT_SIZE) -> Route:
        """Best of ``tournament_size`` routes drawn uniformly with replacement

        A tournament at least as large as the population covers all of it,
        so the population's best route wins.

        Args:
            population: Population to select from
            tournament_size: Number of draws

        Returns:
            Selected route (not a copy)
        """
        if len(population) == 0:
            raise ValueError("Population cannot be empty")
        if tournament_size < 1:
            raise ValueError(f"Tournament size must be positive, got {tournament_size}")

        if tournament_size >= len(population):
            return population.get_best_route()

        size = len(population)
        contestants = [population.get_route(self.rng.randrange(size))
                       for _ in range(tournament_size)]
        return min(contestants, key=lambda route: route.total_distance)

    def roulette_selection(self, population: Population) -> Route:
        """Fitness-proportional selection

        Falls back to the last route when every fitness is zero.
        """
        if len(population) == 0:
            raise ValueError("Population cannot be empty")

        total_fitness = population.get_total_fitness()
        if total_fitness <= 0:
            return population.get_route(len(population) - 1)

        value = self.rng.random() * total_fitness
        cumulative = 0.0
        for route in population:
            cumulative += route.fitness
            if cumulative >= value:
                return route

        # Floating point residue
        return population.get_route(len(population) - 1)

    def rank_selection(self, population: Population) -> Route:
        """Selection weighted by rank: best gets n, worst gets 1"""
        if len(population) == 0:
            raise ValueError("Population cannot be empty")

        population.sort_by_fitness()
        size = len(population)
        total_rank = size * (size + 1) // 2

        value = self.rng.randrange(total_rank)
        cumulative = 0
        for i in range(size):
            cumulative += size - i
            if value < cumulative:
                return population.get_route(i)

        return population.get_route(size - 1)

    def stochastic_universal_sampling(self, population: Population, count: int) -> List[Route]:
        """Select ``count`` route copies with evenly spaced pointers in one sweep

        Args:
            population: Population to select from
            count: Number of selections

        Returns:
            List of copied routes, in population order
        """
        if len(population) == 0:
            raise ValueError("Population cannot be empty")
        if count <= 0:
            return []

        routes = population.routes
        total_fitness = population.get_total_fitness()
        if total_fitness <= 0:
            return [routes[-1].copy() for _ in range(count)]

        pointer_spacing = total_fitness / count
        start = self.rng.random() * pointer_spacing

        selected = []
        index = 0
        cumulative = routes[0].fitness
        for i in range(count):
            pointer = start + i * pointer_spacing
            while cumulative <= pointer and index < len(routes) - 1:
                index += 1
                cumulative += routes[index].fitness
            selected.append(routes[index].copy())

        return selected

    def select_parents(self, population: Population,
                       method: SelectionMethod = SelectionMethod.TOURNAMENT,
                       tournament_size: int = DEFAULT_TOURNAMENT_SIZE) -> Tuple[Route, Route]:
        """Pick two parents with the given strategy"""
        if method == SelectionMethod.TOURNAMENT:
            return (self.tournament_selection(population, tournament_size),
                    self.tournament_selection(population, tournament_size))
        if method == SelectionMethod.ROULETTE:
            return self.roulette_selection(population), self.roulette_selection(population)
        if method == SelectionMethod.RANK:
            return self.rank_selection(population), self.rank_selection(population)
        if method == SelectionMethod.SUS:
            parent1, parent2 = self.stochastic_universal_sampling(population, 2)
            return parent1, parent2
        raise ConfigurationError(f"Unknown selection method: {method}")

    # =============================================================================
    # CROSSOVER OPERATORS
    # =============================================================================

    def pmx_crossover(self, parent1: Route, parent2: Route,
                      point1: int, point2: int) -> Tuple[Route, Route]:
        """Partially mapped crossover

        Offspring 1 takes parent 1's cities in ``[point1, point2)`` and
        fills the rest from parent 2, resolving conflicts through the
        segment mapping chain. A chain that cannot resolve falls back to
        parent 2's first city not yet placed. Offspring 2 is the mirror
        image.

        Raises:
            ConfigurationError: If the cut points are out of range or unordered
            InvalidRouteError: If the parents differ in length or start city
        """
        size = len(parent1)
        if len(parent2) != size:
            raise InvalidRouteError(
                f"Parents must have the same length ({size} != {len(parent2)})"
            )
        if parent1.start_city != parent2.start_city:
            raise InvalidRouteError("Parents must share the same start city")
        if point1 >= point2 or point1 < 0 or point2 > size:
            raise ConfigurationError(
                f"Invalid crossover points ({point1}, {point2}) for route length {size}"
            )

        offspring1 = self._create_pmx_offspring(parent1, parent2, point1, point2)
        offspring2 = self._create_pmx_offspring(parent2, parent1, point1, point2)
        return offspring1, offspring2

    def _create_pmx_offspring(self, donor: Route, other: Route,
                              point1: int, point2: int) -> Route:
        size = len(donor)
        donor_cities = donor.cities
        other_cities = other.cities

        child: List[Optional[City]] = [None] * size
        child[point1:point2] = donor_cities[point1:point2]
        placed: Set[City] = set(donor_cities[point1:point2])

        # Segment position pairs, keyed by the other parent's city
        mapping: Dict[City, City] = {
            other_cities[i]: donor_cities[i] for i in range(point1, point2)
        }

        for i in range(size):
            if point1 <= i < point2:
                continue

            candidate = other_cities[i]
            visited = set()
            while candidate in placed:
                mapped = mapping.get(candidate)
                if mapped is None or mapped in visited:
                    candidate = self._first_unplaced(other_cities, placed)
                    break
                visited.add(candidate)
                candidate = mapped

            if candidate is not None:
                child[i] = candidate
                placed.add(candidate)

        for i in range(size):
            if child[i] is None:
                candidate = self._first_unplaced(other_cities, placed)
                if candidate is None:
                    raise InvalidRouteError("Parents are not permutations of the same cities")
                child[i] = candidate
                placed.add(candidate)

        return Route(donor.start_city, child, donor.oracle)

    @staticmethod
    def _first_unplaced(cities, placed: Set[City]) -> Optional[City]:
        for city in cities:
            if city not in placed:
                return city
        return None

    # =============================================================================
    # MUTATION OPERATORS
    # =============================================================================

    def swap_mutation(self, route: Route, mutation_rate: float) -> Route:
        """Exchange two distinct random positions

        Args:
            route: Route to mutate
            mutation_rate: Probability of mutation (0.0 to 1.0)

        Returns:
            ``route`` itself when no mutation happens, otherwise a mutated copy
        """
        if self.rng.random() >= mutation_rate:
            return route

        mutated = route.copy()
        size = len(mutated)
        if size < 2:
            return mutated

        pos1 = self.rng.randrange(size)
        pos2 = self.rng.randrange(size - 1)
        if pos2 >= pos1:
            pos2 += 1

        city1 = mutated.get_city(pos1)
        mutated.set_city(pos1, mutated.get_city(pos2))
        mutated.set_city(pos2, city1)
        return mutated

    def inversion_mutation(self, route: Route, mutation_rate: float) -> Route:
        """Reverse the cities between two random positions (inclusive)"""
        if self.rng.random() >= mutation_rate:
            return route

        mutated = route.copy()
        size = len(mutated)
        if size < 2:
            return mutated

        pos1, pos2 = sorted((self.rng.randrange(size), self.rng.randrange(size)))
        while pos1 < pos2:
            city1 = mutated.get_city(pos1)
            mutated.set_city(pos1, mutated.get_city(pos2))
            mutated.set_city(pos2, city1)
            pos1 += 1
            pos2 -= 1
        return mutated

    def scramble_mutation(self, route: Route, mutation_rate: float) -> Route:
        """Shuffle the cities between two random positions (inclusive)"""
        if self.rng.random() >= mutation_rate:
            return route

        mutated = route.copy()
        size = len(mutated)
        if size < 2:
            return mutated

        pos1, pos2 = sorted((self.rng.randrange(size), self.rng.randrange(size)))
        segment = list(mutated.cities[pos1:pos2 + 1])
        self.rng.shuffle(segment)
        for offset, city in enumerate(segment):
            mutated.set_city(pos1 + offset, city)
        return mutated

    def mutate(self, route: Route, mutation_rate: float,
               method: MutationMethod = MutationMethod.SWAP) -> Route:
        """Apply the mutation strategy named by ``method``"""
        if method == MutationMethod.SWAP:
            return self.swap_mutation(route, mutation_rate)
        if method == MutationMethod.INVERSION:
            return self.inversion_mutation(route, mutation_rate)
        if method == MutationMethod.SCRAMBLE:
            return self.scramble_mutation(route, mutation_rate)
        raise ConfigurationError(f"Unknown mutation method: {method}")
