"""
Shortest Path GA - Main Application
Command-line front end: reads the graph and endpoints, runs the GA, prints the result.
"""

import argparse
import logging
import sys

from config import GAConfig, load_config
from data_generator import (
    EXAMPLE_DISTANCE_MATRIX,
    generate_random_matrix,
    load_distance_matrix,
    load_tsp_file,
    matrix_from_coordinates,
)
from genetic_algorithm import ShortestPathGA
from path_core import DistanceMatrix, InvalidConfigurationError

logger = logging.getLogger(__name__)


def setup_logging(level=logging.WARNING):
    """Set up logging configuration"""
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )


def build_parser():
    parser = argparse.ArgumentParser(
        description="Find a short path between two nodes of a complete weighted graph with a Genetic Algorithm",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Built-in 4-node example, prompted for start and end
  python main.py

  # Matrix from a file, 0 -> 9, fixed seed
  python main.py --matrix graph.csv --start 0 --end 9 --seed 7

  # Random asymmetric 20-node graph with a convergence plot
  python main.py --random 20 --start 0 --end 19 --plot
        """
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument('--matrix', type=str, help='Distance matrix file (.json, .csv or whitespace text)')
    source.add_argument('--tsp', type=str, help='TSPLIB file with NODE_COORD_SECTION (Euclidean distances)')
    source.add_argument('--random', type=int, metavar='N', help='Generate a random N-node graph')

    parser.add_argument('--config', type=str, help='JSON config file with GA parameters')
    parser.add_argument('--start', type=int, help='Start node index')
    parser.add_argument('--end', type=int, help='End node index')
    parser.add_argument('--population-size', type=int, help='Individuals per generation (default: 100)')
    parser.add_argument('--generations', type=int, help='Number of generations (default: 500)')
    parser.add_argument('--mutation-rate', type=float, help='Per-individual mutation probability (default: 0.1)')
    parser.add_argument('--seed', type=int, help='Random seed for reproducible runs')
    parser.add_argument('--quiet', action='store_true', help='Do not print per-generation progress')
    parser.add_argument(
        '--log-level',
        type=str,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        default='WARNING',
        help='Logging level (default: WARNING)'
    )
    parser.add_argument('--plot', action='store_true', help='Show convergence and path plots')
    parser.add_argument('--save-plot', type=str, help='Save the convergence plot to this file')

    return parser


def load_matrix(args, config: GAConfig) -> DistanceMatrix:
    if args.matrix:
        return load_distance_matrix(args.matrix)
    if args.tsp:
        return matrix_from_coordinates(load_tsp_file(args.tsp))
    if args.random:
        return generate_random_matrix(args.random, seed=config.seed)
    if config.matrix_file:
        return load_distance_matrix(config.matrix_file)
    return DistanceMatrix(EXAMPLE_DISTANCE_MATRIX)


def prompt_node(prompt: str) -> int:
    try:
        value = input(prompt).strip()
    except EOFError:
        raise InvalidConfigurationError("Expected an integer node index, but input was closed") from None
    try:
        return int(value)
    except ValueError:
        raise InvalidConfigurationError(f"Expected an integer node index, got {value!r}") from None


def print_progress(generation: int, best_length: float):
    print(f"Generation {generation}, Best Length: {best_length}")


def run(args) -> int:
    config = load_config(args.config) if args.config else GAConfig()
    config = config.merged(
        population_size=args.population_size,
        generations=args.generations,
        mutation_rate=args.mutation_rate,
        seed=args.seed,
        start_node=args.start,
        end_node=args.end,
    ).validate()

    matrix = load_matrix(args, config)
    print(f"Loaded graph with {matrix.city_count} cities")

    start_node = config.start_node
    if start_node is None:
        start_node = prompt_node("Enter the start city index: ")
    end_node = config.end_node
    if end_node is None:
        end_node = prompt_node("Enter the end city index: ")

    solver = ShortestPathGA(matrix, **config.solver_kwargs())
    result = solver.solve(
        start_node,
        end_node,
        callback=None if args.quiet else print_progress
    )

    print("Best Path: " + " -> ".join(str(n) for n in result.best_path))
    print(f"Total Length: {result.best_length}")

    if args.plot or args.save_plot:
        from visualization import PathVisualizer

        visualizer = PathVisualizer()
        visualizer.plot_convergence(result.history, save_path=args.save_plot, show=args.plot)
        if args.plot:
            visualizer.plot_path(result.best_path, title="Best Path Found")

    return 0


def main(argv=None):
    """Main entry point for the shortest path GA application."""
    args = build_parser().parse_args(argv)
    setup_logging(getattr(logging, args.log_level))

    try:
        return run(args)
    except (InvalidConfigurationError, FileNotFoundError, ValueError) as e:
        logger.debug("Run aborted", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
