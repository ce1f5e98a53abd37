import sys
import os
import time
from typing import Sequence

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from hypermaze.core.graph import HypercubeGraph
from hypermaze.core.complexity import MazeAnalyzer
from hypermaze.algo.factory import build_traversal


def benchmark_shape(dimensions: Sequence[int], algo: str):
    print(f"\n--- Benchmarking {algo.upper()} on {list(dimensions)} ---")

    start_time = time.time()
    graph = HypercubeGraph(dimensions)
    print(f"Graph Init: {time.time() - start_time:.4f}s ({graph.size:,} cells)")

    engine = build_traversal(graph, algo, seed=42)
    gen_start = time.time()
    steps = engine.run_all()
    gen_time = time.time() - gen_start

    print(f"Generation Time: {gen_time:.4f}s ({steps:,} steps)")
    print(f"Speed: {graph.size / gen_time:,.0f} cells/sec")
    print(f"Stats: {MazeAnalyzer.calculate_stats(graph)}")


def run_suite():
    shapes = [
        (100, 100),
        (20, 20, 20),
        (8, 8, 8, 8),
        (4, 4, 4, 4, 4, 4),
    ]

    for dims in shapes:
        for algo in ("dfs", "bfs"):
            benchmark_shape(dims, algo)


if __name__ == "__main__":
    run_suite()
