#!/usr/bin/env python3
"""
Cross-check the step solver against the reference algorithms.

Runs the step solver, heap Dijkstra, Bellman-Ford and Floyd-Warshall on a
grid of generated graphs, verifies that all of them agree on every distance,
and writes a CSV with timings and step counts. ``--plot`` additionally saves
a PNG of step counts against graph size.
"""

from __future__ import annotations

import argparse
import csv
import time
from pathlib import Path
from typing import Callable, Dict, List

from generator.graph_generator import generate_graph
from pathstep.baselines import bellman_ford, dijkstra_reference, floyd_warshall_from
from pathstep.graph import Graph
from pathstep.solver import StepSolver

SIZES = [5, 10, 20, 40]
SEEDS = [0, 1, 2]
GRAPH_TYPES = ["complete", "erdos_renyi"]


def _run_step_solver(G: Graph, source: int) -> Dict[str, object]:
    solver = StepSolver(G, source)
    res = solver.solve()
    row: Dict[str, object] = {"distances": res.distances}
    row.update({f"counter_{k}": v for k, v in solver.summary().items()})
    return row


_ALGOS: Dict[str, Callable[[Graph, int], Dict[str, object]]] = {
    "step": _run_step_solver,
    "dijkstra": lambda G, s: {"distances": dijkstra_reference(G, s).distances},
    "bellman-ford": lambda G, s: {"distances": bellman_ford(G, s).distances},
    "floyd-warshall": lambda G, s: {"distances": floyd_warshall_from(G, s)},
}


def _run(name: str, G: Graph, source: int) -> Dict[str, object]:
    t0 = time.perf_counter()
    row = _ALGOS[name](G, source)
    row["wall_ms"] = (time.perf_counter() - t0) * 1000.0
    row["algo"] = name
    return row


def main() -> None:
    parser = argparse.ArgumentParser(description="Compare the step solver with reference algorithms")
    parser.add_argument("--out", default="algorithm_comparison.csv", help="CSV output path")
    parser.add_argument("--plot", default=None, help="Optional PNG path for a steps-vs-size plot")
    args = parser.parse_args()

    out_csv = Path(args.out)
    fieldnames: List[str] = [
        "graph_type",
        "n",
        "m",
        "seed",
        "algo",
        "wall_ms",
        "agrees",
        "steps",
        "relaxations",
    ]

    rows: List[Dict[str, object]] = []
    mismatches = 0
    for graph_type in GRAPH_TYPES:
        for n in SIZES:
            for seed in SEEDS:
                gen = generate_graph(n=n, graph_type=graph_type, seed=seed)
                results = {algo: _run(algo, gen.graph, gen.source) for algo in _ALGOS}
                expected = results["floyd-warshall"]["distances"]
                for algo, r in results.items():
                    agrees = r["distances"] == expected
                    mismatches += 0 if agrees else 1
                    rows.append(
                        {
                            "graph_type": graph_type,
                            "n": gen.n,
                            "m": gen.m,
                            "seed": seed,
                            "algo": algo,
                            "wall_ms": r["wall_ms"],
                            "agrees": agrees,
                            "steps": r.get("counter_steps", ""),
                            "relaxations": r.get("counter_relaxations", ""),
                        }
                    )
                    print(
                        f"{graph_type:12s} n={gen.n:4d} m={gen.m:6d} seed={seed} "
                        f"algo={algo:15s} wall_ms={r['wall_ms']:.2f} agrees={agrees}"
                    )

    with out_csv.open("w", newline="") as fh:
        writer = csv.DictWriter(fh, fieldnames=fieldnames)
        writer.writeheader()
        for row in rows:
            writer.writerow({k: row.get(k, "") for k in fieldnames})
    print(f"\nWrote CSV summary to {out_csv}")

    if args.plot:
        import matplotlib.pyplot as plt

        step_rows = [r for r in rows if r["algo"] == "step"]
        plt.figure(figsize=(8, 6))
        for graph_type in GRAPH_TYPES:
            pts = [(r["m"], r["steps"]) for r in step_rows if r["graph_type"] == graph_type]
            plt.scatter([p[0] for p in pts], [p[1] for p in pts], label=graph_type)
        plt.xlabel("edges (m)")
        plt.ylabel("advance() calls")
        plt.legend()
        plt.tight_layout()
        plt.savefig(args.plot)
        print(f"Wrote plot to {args.plot}")

    if mismatches:
        raise SystemExit(f"{mismatches} result(s) disagree with Floyd-Warshall")


if __name__ == "__main__":
    main()
