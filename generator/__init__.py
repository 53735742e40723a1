"""Graph producers for the step solver: random generation and fixed scenarios."""

from .graph_generator import GeneratedGraph, generate_graph
from .scenarios import SCENARIOS, load_scenario

__all__ = ["GeneratedGraph", "generate_graph", "SCENARIOS", "load_scenario"]
