#!/usr/bin/env python3
"""
GA Integration Tests
End-to-end runs over the default 8-city graph
"""

import unittest
import os
import random
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from ga_test_utils import GATestBase
from genetic_tsp import GAConfig, GeneticTSPOptimizer, MutationMethod, SelectionMethod


class TestGAIntegration(GATestBase):
    """Test complete genetic algorithm runs"""

    def setUp(self):
        super().setUp()
        self.config = GAConfig(
            population_size=100,
            max_generations=20,
            elitism_count=5,
            crossover_rate=70.0,
            mutation_rate=0.8,
            crossover_point1=2,
            crossover_point2=5,
            start_city_id="F",
            random_seed=2024,
        )
        self.config.validate()

    def test_default_run(self):
        """Test a standard run records every generation and never regresses"""
        optimizer = GeneticTSPOptimizer()
        result = optimizer.run_genetic_algorithm(self.config)

        history = result.generation_history
        self.assertEqual(len(history), 21)
        self.assertEqual(history[0].generation, 0)
        self.assertEqual(history[-1].generation, 20)
        self.assertLessEqual(result.best_distance, history[0].best_distance)

        for previous, current in zip(history, history[1:]):
            self.assertLessEqual(current.best_distance, previous.best_distance)

        for route in optimizer.get_current_population():
            self.assertValidPermutation(route)
            self.assertIs(route.start_city, optimizer.get_cities()["F"])

    def test_finds_finite_tour(self):
        """Test a hundred random routes plus evolution avoid missing edges"""
        result = GeneticTSPOptimizer().run_genetic_algorithm(self.config)

        self.assertLess(result.best_distance, self.oracle.infinity)
        self.assertGreaterEqual(result.best_distance, self.oracle.theoretical_minimum())

    def test_alternative_operators(self):
        optimizer = GeneticTSPOptimizer(rng=random.Random(9))
        for selection in (SelectionMethod.RANK, SelectionMethod.SUS):
            for mutation in (MutationMethod.INVERSION, MutationMethod.SCRAMBLE):
                config = GAConfig(selection_method=selection, mutation_method=mutation,
                                  max_generations=10, random_seed=11)
                result = optimizer.run_genetic_algorithm(config)
                self.assertEqual(len(result.generation_history), 11)
                self.assertValidPermutation(result.best_route)
                self.assertLessEqual(result.best_distance,
                                     result.generation_history[0].best_distance)

    def test_other_start_city(self):
        result = GeneticTSPOptimizer().run_genetic_algorithm(
            GAConfig(start_city_id="K", max_generations=5, random_seed=5)
        )
        names = result.best_route.city_names()
        self.assertEqual(names[0], "K")
        self.assertEqual(names[-1], "K")
        self.assertEqual(sorted(names[1:-1]), sorted(c.name for c in self.cities.values()
                                                     if c.id != "K"))


if __name__ == '__main__':
    unittest.main()
