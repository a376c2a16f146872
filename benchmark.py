"""
GA vs. exhaustive search on small random graphs.
Reports how often and how closely the GA reaches the optimal path.
"""

import argparse
import logging
import os
import time

import numpy as np
import pandas as pd
from tqdm import tqdm

from brute_force import MAX_BRUTE_FORCE_CITIES, brute_force_shortest_path
from data_generator import generate_random_matrix
from genetic_algorithm import ShortestPathGA
from main import setup_logging
from path_core import DistanceMatrix, InvalidConfigurationError

logger = logging.getLogger(__name__)


# ================================
# CONFIGURATION
# ================================
CITY_COUNTS = (5, 7, 9)
INSTANCES_PER_SIZE = 3
RUNS_PER_INSTANCE = 5
GA_PARAMS = {
    "population_size": 60,
    "generations": 150,
    "mutation_rate": 0.1,
}


def benchmark_instance(matrix, start_node, end_node, runs=RUNS_PER_INSTANCE, seed=0,
                       ga_params=None, label="instance", progress=True):
    """
    Run the GA `runs` times on one matrix and compare with the exact optimum.

    Returns:
        dict with best/avg/std length, hit rate and gap to the optimum
    """
    if not isinstance(matrix, DistanceMatrix):
        matrix = DistanceMatrix(matrix)
    params = dict(GA_PARAMS, **(ga_params or {}))

    t0 = time.time()
    _, optimal = brute_force_shortest_path(matrix, start_node, end_node)
    exact_time = time.time() - t0

    lengths = []
    times = []
    for run in tqdm(range(runs), desc=label, disable=not progress):
        solver = ShortestPathGA(matrix, seed=seed + run, **params)
        result = solver.solve(start_node, end_node)
        lengths.append(result.best_length)
        times.append(result.elapsed)

    best = float(np.min(lengths))
    avg = float(np.mean(lengths))

    return {
        "instance": label,
        "cities": matrix.city_count,
        "optimal": float(optimal),
        "best_length": best,
        "avg_length": avg,
        "std_length": float(np.std(lengths)),
        "hit_rate": float(np.mean(np.isclose(lengths, optimal))),
        "avg_gap_percent": (avg - optimal) / optimal * 100 if optimal else 0.0,
        "avg_ga_time": float(np.mean(times)),
        "exact_time": exact_time,
    }


def run_benchmark(city_counts=CITY_COUNTS, instances=INSTANCES_PER_SIZE, runs=RUNS_PER_INSTANCE,
                  seed=0, ga_params=None, progress=True) -> pd.DataFrame:
    rows = []
    for n in city_counts:
        for k in range(instances):
            matrix = generate_random_matrix(n, seed=seed + 1000 * n + k)
            rows.append(benchmark_instance(
                matrix, 0, n - 1,
                runs=runs,
                seed=seed,
                ga_params=ga_params,
                label=f"n{n}_#{k}",
                progress=progress
            ))
            logger.info("Finished %s", rows[-1]["instance"])

    return pd.DataFrame(rows)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Benchmark the GA against exhaustive search")
    parser.add_argument('--cities', type=int, nargs='+', default=list(CITY_COUNTS))
    parser.add_argument('--instances', type=int, default=INSTANCES_PER_SIZE)
    parser.add_argument('--runs', type=int, default=RUNS_PER_INSTANCE)
    parser.add_argument('--seed', type=int, default=0)
    parser.add_argument('--output', type=str, help='Write results to this CSV file')
    parser.add_argument(
        '--log-level',
        type=str,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        default='WARNING',
        help='Logging level (default: WARNING)'
    )
    args = parser.parse_args(argv)
    setup_logging(getattr(logging, args.log_level))

    too_large = [n for n in args.cities if n > MAX_BRUTE_FORCE_CITIES]
    if too_large:
        parser.error(f"--cities must be at most {MAX_BRUTE_FORCE_CITIES} for exhaustive search, got {too_large}")

    try:
        df = run_benchmark(args.cities, args.instances, args.runs, seed=args.seed)
    except InvalidConfigurationError as e:
        parser.error(str(e))

    print("\n=== GA vs. exhaustive search ===")
    print(df.sort_values(by=["cities", "instance"]).to_string(index=False))

    summary = df.groupby("cities")[["hit_rate", "avg_gap_percent", "avg_ga_time", "exact_time"]].mean()
    print("\n=== Mean per size ===")
    print(summary)

    if args.output:
        out_dir = os.path.dirname(args.output)
        if out_dir:
            os.makedirs(out_dir, exist_ok=True)
        df.to_csv(args.output, index=False)
        print(f"\nSaved: {args.output}")

    return df


if __name__ == "__main__":
    main()
