#!/usr/bin/env python3
"""
Unit tests for Genetic TSP Optimizer
"""

import unittest
import random
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from ga_test_utils import GATestBase
from genetic_tsp import (
    GeneticTSPOptimizer, GenerationResult, GAExecutionResult, City, DistanceOracle,
    SelectionMethod, MutationMethod, ConfigurationError, PopulationNotInitializedError,
    GAExecutionError, create_default_cities,
)


class TestGeneticOptimizer(GATestBase):
    """Test genetic TSP optimizer"""

    def setUp(self):
        super().setUp()
        self.optimizer = GeneticTSPOptimizer(rng=random.Random(1))
        self.config = self.make_config()

    def test_optimizer_initialization(self):
        """Test optimizer starts with the default graph and no population"""
        self.assertEqual(len(self.optimizer.get_cities()), 8)
        self.assertIsNone(self.optimizer.get_current_population())
        self.assertIsNone(self.optimizer.current_config)
        self.assertEqual(self.optimizer.get_history(), [])
        self.assertIs(self.optimizer.operators.rng, self.optimizer.rng)

    def test_get_cities_returns_copy(self):
        cities = self.optimizer.get_cities()
        cities.pop("F")
        self.assertIn("F", self.optimizer.get_cities())

    # =============================================================================
    # UNINITIALIZED STATE
    # =============================================================================

    def test_evolve_before_initialize(self):
        with self.assertRaises(PopulationNotInitializedError):
            self.optimizer.evolve_generation(1)

    def test_stats_before_initialize(self):
        with self.assertRaises(PopulationNotInitializedError):
            self.optimizer.get_population_stats()

    def test_not_initialized_is_runtime_error(self):
        with self.assertRaises(RuntimeError):
            self.optimizer.evolve_generation(1)

    # =============================================================================
    # INITIALIZATION
    # =============================================================================

    def test_initialize_population(self):
        population = self.optimizer.initialize_population(self.config)

        self.assertEqual(len(population), 30)
        self.assertIs(self.optimizer.get_current_population(), population)
        self.assertIs(self.optimizer.current_config, self.config)
        for route in population:
            self.assertValidPermutation(route)
            self.assertEqual(route.start_city.id, "F")

    def test_initialize_unknown_start_city(self):
        with self.assertRaises(ConfigurationError):
            self.optimizer.initialize_population(self.make_config(start_city_id="Z"))

    def test_initialize_resets_history(self):
        self.optimizer.initialize_population(self.config)
        self.optimizer.evolve_generation(1)
        self.assertEqual(len(self.optimizer.get_history()), 1)

        self.optimizer.initialize_population(self.config)
        self.assertEqual(self.optimizer.get_history(), [])

    def test_seeded_initialization_is_reproducible(self):
        first = self.optimizer.initialize_population(self.config)
        second = GeneticTSPOptimizer().initialize_population(self.config)
        self.assertEqual([r.cities for r in first], [r.cities for r in second])

    # =============================================================================
    # EVOLUTION
    # =============================================================================

    def test_evolve_generation(self):
        """Test one generation keeps the size and records a snapshot"""
        self.optimizer.initialize_population(self.config)
        result = self.optimizer.evolve_generation(1)

        self.assertIsInstance(result, GenerationResult)
        self.assertEqual(result.generation, 1)
        population = self.optimizer.get_current_population()
        self.assertEqual(len(population), 30)
        for route in population:
            self.assertValidPermutation(route)

        self.assertLessEqual(result.best_distance, result.average_distance)
        self.assertLessEqual(result.average_distance, result.worst_distance)
        self.assertEqual(result.best_distance, result.best_route.total_distance)
        self.assertEqual(len(result.top_routes), 10)
        self.assertEqual(self.optimizer.get_history(), [result])

    def test_elitism_never_regresses(self):
        """Test the best distance never gets worse with elitism"""
        population = self.optimizer.initialize_population(self.config)
        previous_best = population.get_best_distance()

        for generation in range(1, 11):
            result = self.optimizer.evolve_generation(generation)
            self.assertLessEqual(result.best_distance, previous_best)
            previous_best = result.best_distance

    def test_elites_carried_over(self):
        population = self.optimizer.initialize_population(self.config)
        elites = population.get_top_routes(2)
        self.optimizer.evolve_generation(1)

        new_routes = self.optimizer.get_current_population().routes
        for elite in elites:
            self.assertIn(elite, new_routes)

    def test_odd_population_size(self):
        self.optimizer.initialize_population(self.make_config(population_size=31, elitism_count=0))
        self.optimizer.evolve_generation(1)
        self.assertEqual(len(self.optimizer.get_current_population()), 31)

    def test_every_operator_combination(self):
        for selection in SelectionMethod:
            for mutation in MutationMethod:
                config = self.make_config(selection_method=selection, mutation_method=mutation,
                                          max_generations=2)
                result = self.optimizer.run_genetic_algorithm(config)
                self.assertValidPermutation(result.best_route)

    def test_no_crossover_or_mutation(self):
        """Test zero rates only copy parents"""
        config = self.make_config(crossover_rate=0.0, mutation_rate=0.0)
        population = self.optimizer.initialize_population(config)
        tours = {route.cities for route in population}

        self.optimizer.evolve_generation(1)
        for route in self.optimizer.get_current_population():
            self.assertIn(route.cities, tours)

    # =============================================================================
    # FULL RUN
    # =============================================================================

    def test_run_genetic_algorithm(self):
        result = self.optimizer.run_genetic_algorithm(self.config)

        self.assertIsInstance(result, GAExecutionResult)
        self.assertEqual(result.total_generations, 5)
        self.assertEqual(len(result.generation_history), 6)
        self.assertEqual([g.generation for g in result.generation_history], list(range(6)))
        self.assertEqual(result.best_distance, result.best_route.total_distance)
        self.assertLessEqual(result.best_distance, result.generation_history[0].best_distance)
        self.assertGreaterEqual(result.improvement(), 0.0)
        self.assertGreaterEqual(result.execution_time_ms, 0.0)
        self.assertEqual(result.config, self.config)

    def test_run_is_reproducible_with_seed(self):
        first = GeneticTSPOptimizer().run_genetic_algorithm(self.config)
        second = GeneticTSPOptimizer().run_genetic_algorithm(self.config)
        self.assertEqual(first.best_route.cities, second.best_route.cities)
        self.assertEqual([g.best_distance for g in first.generation_history],
                         [g.best_distance for g in second.generation_history])

    def test_run_wraps_errors(self):
        """Test failures surface as GAExecutionError with the original cause"""
        with self.assertRaises(GAExecutionError) as context:
            self.optimizer.run_genetic_algorithm(self.make_config(start_city_id="Z"))
        self.assertIsInstance(context.exception.__cause__, ConfigurationError)

    def test_run_wraps_invalid_crossover_points(self):
        config = self.make_config(crossover_point1=5, crossover_point2=2, crossover_rate=100.0)
        with self.assertRaises(GAExecutionError) as context:
            self.optimizer.run_genetic_algorithm(config)
        self.assertIsInstance(context.exception.__cause__, ConfigurationError)

    def test_result_keeps_config_snapshot(self):
        """Test changing the caller's config after a run leaves the result alone"""
        result = self.optimizer.run_genetic_algorithm(self.config)
        self.assertIsNot(result.config, self.config)

        self.config.population_size = 500
        self.config.crossover_rate = 65.0
        self.assertEqual(result.config.population_size, 30)
        self.assertEqual(result.config.crossover_rate, 70.0)
        self.assertEqual(result.to_dict()['config']['population_size'], 30)

    def test_result_to_dict(self):
        result = self.optimizer.run_genetic_algorithm(self.config)
        data = result.to_dict()

        self.assertEqual(data['best_route'][0], 'F')
        self.assertEqual(data['best_route'][-1], 'F')
        self.assertEqual(len(data['generation_history']), 6)
        self.assertEqual(data['config']['population_size'], 30)
        self.assertNotIn('generation_history', result.to_dict(include_history=False))

    # =============================================================================
    # STATE ACCESSORS
    # =============================================================================

    def test_population_stats(self):
        self.optimizer.initialize_population(self.config)
        stats = self.optimizer.get_population_stats()

        self.assertEqual(stats['size'], 30)
        self.assertLessEqual(stats['best_distance'], stats['average_distance'])
        self.assertLessEqual(stats['average_distance'], stats['worst_distance'])
        self.assertEqual(len(stats['best_route']), 9)

    def test_history_is_a_copy(self):
        self.optimizer.run_genetic_algorithm(self.config)
        history = self.optimizer.get_history()
        history.clear()
        self.assertEqual(len(self.optimizer.get_history()), 6)

    def test_set_cities_resets_state(self):
        """Test replacing the cities discards population and history"""
        self.optimizer.run_genetic_algorithm(self.config)

        cities = create_default_cities()
        cities.pop("H")
        self.optimizer.set_cities(cities)

        self.assertEqual(len(self.optimizer.get_cities()), 7)
        self.assertIsNone(self.optimizer.get_current_population())
        self.assertEqual(self.optimizer.get_history(), [])
        with self.assertRaises(PopulationNotInitializedError):
            self.optimizer.evolve_generation(1)

        population = self.optimizer.initialize_population(self.config)
        for route in population:
            self.assertEqual(len(route), 6)

    def test_custom_graph(self):
        """Test a small custom graph finds its only finite tour"""
        cities = {cid: City(cid, cid) for cid in "ABCD"}
        oracle = DistanceOracle(edges=[("A", "B", 1), ("B", "C", 1), ("C", "D", 1), ("D", "A", 1)])
        optimizer = GeneticTSPOptimizer(cities=cities, oracle=oracle, rng=random.Random(5))

        config = self.make_config(start_city_id="A", crossover_point1=1, crossover_point2=2)
        result = optimizer.run_genetic_algorithm(config)
        self.assertEqual(result.best_distance, 4)


if __name__ == '__main__':
    unittest.main()
