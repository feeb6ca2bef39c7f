#!/usr/bin/env python3
"""
Genetic TSP Solver - Command Line Interface
Runs the genetic algorithm over the default city graph
"""

import argparse
import dataclasses
import json
import logging
import sys
from typing import List, Optional

import yaml

from .common import GAExecutionError, get_logger, setup_logging
from .config import GAConfig, load_config
from .operators import MutationMethod, SelectionMethod
from .optimizer import GAExecutionResult, GeneticTSPOptimizer

logger = get_logger(__name__)

# argparse destination -> GAConfig field
CONFIG_OVERRIDES = {
    'population_size': 'population_size',
    'crossover_rate': 'crossover_rate',
    'mutation_rate': 'mutation_rate',
    'max_generations': 'max_generations',
    'elitism_count': 'elitism_count',
    'generation_gap': 'generation_gap',
    'crossover_point1': 'crossover_point1',
    'crossover_point2': 'crossover_point2',
    'start_city': 'start_city_id',
    'selection': 'selection_method',
    'mutation': 'mutation_method',
    'tournament_size': 'tournament_size',
    'seed': 'random_seed',
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='genetic-tsp',
        description='Genetic Algorithm TSP Solver - Command Line Interface',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  genetic-tsp --max-generations 50 --seed 42
  genetic-tsp --config run.yaml --json
  genetic-tsp --selection rank --mutation inversion --plot convergence.png
        """
    )

    parser.add_argument('--config', '-c', type=str,
                        help='JSON or YAML file with GA parameters')
    parser.add_argument('--population-size', '-p', type=int,
                        help='Routes per generation (>= 100)')
    parser.add_argument('--crossover-rate', type=float,
                        help='Crossover probability in percent (60-80)')
    parser.add_argument('--mutation-rate', type=float,
                        help='Mutation probability in percent (0.5-1.0)')
    parser.add_argument('--max-generations', '-g', type=int,
                        help='Number of generations to evolve')
    parser.add_argument('--elitism-count', '-e', type=int,
                        help='Best routes copied unchanged into each generation (0-20)')
    parser.add_argument('--generation-gap', type=float,
                        help='Generation gap (0-100)')
    parser.add_argument('--crossover-point1', type=int,
                        help='First PMX cut point')
    parser.add_argument('--crossover-point2', type=int,
                        help='Second PMX cut point')
    parser.add_argument('--start-city', '-s', type=str,
                        help='Id of the start city')
    parser.add_argument('--selection', choices=[m.value for m in SelectionMethod],
                        help='Parent selection strategy')
    parser.add_argument('--mutation', choices=[m.value for m in MutationMethod],
                        help='Mutation strategy')
    parser.add_argument('--tournament-size', type=int,
                        help='Tournament size for tournament selection')
    parser.add_argument('--seed', type=int,
                        help='Random seed for reproducible runs')
    parser.add_argument('--json', action='store_true',
                        help='Print the full result as JSON')
    parser.add_argument('--plot', type=str,
                        help='Save a convergence plot to this PNG file')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Debug logging')
    return parser


def build_config(args: argparse.Namespace) -> GAConfig:
    """Config file (or defaults) with command line overrides applied"""
    config = load_config(args.config) if args.config else GAConfig()

    overrides = {}
    for arg_name, field_name in CONFIG_OVERRIDES.items():
        value = getattr(args, arg_name)
        if value is not None:
            overrides[field_name] = value

    return dataclasses.replace(config, **overrides)


def print_summary(result: GAExecutionResult) -> None:
    initial = result.generation_history[0] if result.generation_history else None

    print("🧬 Genetic Algorithm finished")
    print(f"   Generations: {result.total_generations}")
    print(f"   Time: {result.execution_time_ms:.1f}ms")
    if initial is not None:
        print(f"   Initial best distance: {initial.best_distance:.2f}")
    print(f"   Final best distance: {result.best_distance:.2f}")
    print(f"   Best route: {' -> '.join(result.best_route.city_names())}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        config = build_config(args)
        config.validate()
    except (ValueError, OSError, yaml.YAMLError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return 2

    logger.debug(f"Running with {config}")
    optimizer = GeneticTSPOptimizer()
    try:
        result = optimizer.run_genetic_algorithm(config)
    except GAExecutionError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print_summary(result)

    if args.plot:
        from .visualization import plot_convergence
        plot_convergence(result.generation_history, args.plot,
                         theoretical_minimum=optimizer.oracle.theoretical_minimum())
        if not args.json:
            print(f"📊 Convergence plot: {args.plot}")

    return 0


if __name__ == '__main__':
    sys.exit(main())
