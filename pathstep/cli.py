"""Command-line driver for stepping the solver."""

from __future__ import annotations

import argparse
import json
import math
import sys
import traceback
from typing import Any, Dict, List, Optional, TextIO, Tuple

from generator.graph_generator import generate_graph
from generator.scenarios import SCENARIOS, load_scenario

from .exceptions import (
    ConfigError,
    InputError,
    InvalidQueryError,
    NotFoundError,
    PathStepError,
)
from .graph import Graph, VertexId
from .logger import StdLogger
from .solver import SolverConfig, StepEvent, StepSolver


def _build_graph(args: argparse.Namespace) -> Tuple[Graph, int]:
    if args.random:
        gen = generate_graph(
            n=args.n,
            graph_type=args.graph_type,
            w_min=args.min_weight,
            w_max=args.max_weight,
            seed=args.seed,
            density=args.density,
            symmetric=args.symmetric,
        )
        return gen.graph, gen.source
    return load_scenario(args.scenario)


def _jsonable_distance(d: float) -> Optional[float]:
    return None if isinstance(d, float) and math.isinf(d) else d


def format_event(index: int, event: StepEvent) -> str:
    """One trace line per step, e.g. ``3 relax 1->5 w=2 improved phase=VisitingEdges``."""
    parts = [str(index), event.kind]
    if event.edge is not None:
        parts.append(f"{event.vertex}->{event.edge.target} w={event.edge.weight}")
    elif event.vertex is not None:
        parts.append(str(event.vertex))
    if event.improved:
        parts.append("improved")
    if event.settled:
        parts.append("settled")
    parts.append(f"phase={event.phase}")
    return " ".join(parts)


def _run_text(solver: StepSolver, max_steps: Optional[int], trace: Optional[TextIO]) -> int:
    steps = 0
    while not solver.is_done() and (max_steps is None or steps < max_steps):
        event = solver.advance()
        steps += 1
        if trace is not None:
            trace.write(format_event(steps, event) + "\n")
    return steps


def _run_animated(
    solver: StepSolver,
    *,
    interval: float,
    target: Optional[VertexId],
    loop: bool,
    layout_kind: str,
    max_steps: Optional[int],
) -> int:  # pragma: no cover - interactive
    import matplotlib.pyplot as plt

    from .render import draw_frame, layout

    fig, ax = plt.subplots(figsize=(12, 9))
    fig.canvas.manager.set_window_title("Path Finding")
    pos = layout(solver.view(), layout_kind)
    steps = 0
    while plt.fignum_exists(fig.number):
        draw_frame(solver.view(), ax, pos=pos, target=target)
        plt.pause(interval)
        if solver.is_done():
            if not loop:
                break
            solver.reset()
            continue
        if max_steps is not None and steps >= max_steps:
            break
        solver.advance()
        steps += 1
    if plt.fignum_exists(fig.number):
        plt.show()
    return steps


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the ``pathstep`` command-line tool."""
    examples = (
        "Examples:\n"
        "  pathstep --scenario five --trace\n"
        "  pathstep --random --n 8 --seed 3 --target 5\n"
        "  pathstep --random --n 50 --animate --interval 0.1\n"
    )
    p = argparse.ArgumentParser(
        prog="pathstep",
        description="Step-by-step Dijkstra runner",
        epilog=examples,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    p.add_argument("--verbose", action="store_true", help="Show full tracebacks")
    p.add_argument("--log-json", action="store_true", help="Emit structured log lines")
    p.add_argument(
        "--log-level",
        choices=["debug", "info", "quiet"],
        default="quiet",
        help="Log verbosity",
    )
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--scenario", choices=sorted(SCENARIOS), help="Use a built-in graph")
    src.add_argument("--random", action="store_true", help="Use a random graph")
    src.add_argument(
        "--list-scenarios",
        action="store_true",
        help="Print the built-in scenario names and exit",
    )

    p.add_argument("--n", type=int, default=10, help="Vertices (random mode)")
    p.add_argument(
        "--graph-type",
        choices=["complete", "erdos_renyi"],
        default="complete",
        help="Random graph family",
    )
    p.add_argument("--density", type=float, default=0.3, help="Edge probability (erdos_renyi)")
    p.add_argument("--min-weight", type=int, default=0, help="Smallest edge weight")
    p.add_argument("--max-weight", type=int, default=10, help="Weights are below this value")
    p.add_argument("--symmetric", action="store_true", help="Mirror every random edge")
    p.add_argument("--seed", type=int, default=0, help="Seed controlling random graph generation")

    p.add_argument("--source", type=int, default=None, help="Source vertex id")
    p.add_argument("--target", type=int, default=None, help="Target vertex id for path output")
    p.add_argument(
        "--infinity",
        type=int,
        default=None,
        help="Finite sentinel for unreached vertices, above the total edge weight (default: inf)",
    )
    p.add_argument("--max-steps", type=int, default=None, help="Stop after this many steps")
    p.add_argument("--trace", action="store_true", help="Print one line per step")

    p.add_argument("--animate", action="store_true", help="Draw each step in a window")
    p.add_argument("--interval", type=float, default=0.1, help="Seconds between steps")
    p.add_argument("--loop", action="store_true", help="Restart the run when it finishes")
    p.add_argument(
        "--layout",
        choices=["spring", "circular", "shell"],
        default="spring",
    )

    args = p.parse_args(argv)

    if args.list_scenarios:
        for name in sorted(SCENARIOS):
            sys.stdout.write(name + "\n")
        return 0

    try:
        if args.max_steps is not None and args.max_steps < 0:
            raise ConfigError("--max-steps must be >= 0")
        if args.interval <= 0:
            raise ConfigError("--interval must be > 0")

        G, default_source = _build_graph(args)
        G.validate()
        source = default_source if args.source is None else args.source

        cfg = SolverConfig() if args.infinity is None else SolverConfig(infinity=args.infinity)
        stream = sys.stdout if args.log_json else sys.stderr
        level = "info" if args.log_json and args.log_level == "quiet" else args.log_level
        logger = StdLogger(level=level, json_fmt=args.log_json, stream=stream)

        if args.verbose and not args.log_json:
            sys.stderr.write(
                f"config: n={len(G)} m={G.num_edges()} source={source} "
                f"target={args.target} seed={args.seed}\n"
            )

        solver = StepSolver(G, source, config=cfg, logger=logger)

        if args.animate:
            steps = _run_animated(
                solver,
                interval=args.interval,
                target=args.target,
                loop=args.loop,
                layout_kind=args.layout,
                max_steps=args.max_steps,
            )
        else:
            trace = sys.stdout if args.trace and not args.log_json else None
            steps = _run_text(solver, args.max_steps, trace)

        res = solver.result()
        out: Dict[str, Any] = {
            "source": source,
            "done": solver.is_done(),
            "steps": steps,
            "distances": {str(v): _jsonable_distance(d) for v, d in res.distances.items()},
            "predecessors": {str(v): p for v, p in res.predecessors.items()},
        }
        if args.target is not None:
            out["target"] = args.target
            out["path"] = solver.shortest_path_to(args.target, include_source=True)

        logger.info("run", n=len(G), m=G.num_edges(), source=source, **solver.summary())
        if not args.log_json:
            print(json.dumps(out))
        return 0

    except (InputError, ConfigError, NotFoundError, InvalidQueryError) as exc:
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"error: {exc}\n")
        return 64
    except PathStepError as exc:
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"internal error: {exc}\n")
        return 70


if __name__ == "__main__":
    sys.exit(main())
