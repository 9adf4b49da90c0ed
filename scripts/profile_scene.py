"""
Profiling script for graphview scene building and interaction.

Profiles rendering and drag handling on random graphs of growing size.
"""

import cProfile
import pstats
import io
from pstats import SortKey
import time
import sys
from pathlib import Path

# Make the src/ package importable without installing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import numpy as np
from graphview.graph import Graph, Node, Edge, Options, Dimensions
from graphview.renderer import GraphRenderer
from graphview.geom import model_to_device
from graphview.svg import to_svg


def create_graph(n_nodes, n_edges, visited_ratio=0.1):
    """Create a random graph with n nodes and approximately n_edges edges."""
    rng = np.random.default_rng(42)
    xy = rng.uniform(-500, 500, size=(n_nodes, 2))
    nodes = [Node(i, x=float(x), y=float(y), weight=int(i % 10)) for i, (x, y) in enumerate(xy)]

    edges = []
    for _ in range(n_edges):
        source = int(rng.integers(0, n_nodes))
        target = int(rng.integers(0, n_nodes))
        if source != target:
            edges.append(Edge(source, target, weight=int(rng.integers(1, 100)),
                              visited=bool(rng.random() < visited_ratio)))

    return Graph(nodes, edges)


def render_graph(n_nodes, n_edges, repeats=20):
    graph = create_graph(n_nodes, n_edges)
    renderer = GraphRenderer(graph, Options(directed=True, weighted=True), Dimensions())
    for _ in range(repeats):
        renderer.invalidate()
        renderer.render()


def drag_nodes(n_nodes, n_moves=200):
    """Grab the first node and drag it around, re-rendering after each move."""
    graph = create_graph(n_nodes, n_nodes * 2)
    renderer = GraphRenderer(graph, Options(directed=True), Dimensions())
    renderer.zoom_to_fit()

    node = graph.nodes[0]
    start = model_to_device(node, renderer.screen_ctm())
    renderer.handle_pointer_down(start.x, start.y)
    for i in range(n_moves):
        renderer.handle_pointer_move(start.x + i, start.y + i)
        renderer.render()
    renderer.handle_pointer_up()


def serialize_graph(n_nodes, n_edges):
    graph = create_graph(n_nodes, n_edges)
    renderer = GraphRenderer(graph, Options(directed=True, weighted=True), Dimensions())
    to_svg(renderer.render())


def benchmark_scenario(name, func):
    """Benchmark a scenario and print timing."""
    print(f"\n{'='*60}")
    print(f"Profiling: {name}")
    print('='*60)

    profiler = cProfile.Profile()

    start_time = time.time()
    profiler.enable()
    func()
    profiler.disable()
    elapsed = time.time() - start_time

    print(f"\nTotal time: {elapsed:.3f}s")

    s = io.StringIO()
    ps = pstats.Stats(profiler, stream=s).sort_stats(SortKey.CUMULATIVE)
    ps.print_stats(20)  # Top 20 functions

    print("\nTop 20 functions by cumulative time:")
    print(s.getvalue())

    return profiler


def main():
    """Run all profiling scenarios."""
    print("graphview Performance Profiling")
    print("=" * 60)

    scenarios = [
        ("Render Small (20 nodes, 30 edges)", lambda: render_graph(20, 30)),
        ("Render Medium (200 nodes, 400 edges)", lambda: render_graph(200, 400)),
        ("Render Large (2000 nodes, 4000 edges)", lambda: render_graph(2000, 4000, repeats=5)),
        ("Drag (500 nodes)", lambda: drag_nodes(500)),
        ("SVG (1000 nodes, 2000 edges)", lambda: serialize_graph(1000, 2000)),
    ]

    profilers = {}
    for name, func in scenarios:
        profilers[name] = benchmark_scenario(name, func)

    print("\n" + "="*60)
    print("Saving detailed profiles...")
    print("="*60)

    for name, profiler in profilers.items():
        filename = f"profile_{name.lower().replace(' ', '_').replace('(', '').replace(')', '').replace(',', '')}.prof"
        profiler.dump_stats(filename)
        print(f"Saved: {filename}")

    print("\nTo view detailed profile, use:")
    print("  python -m pstats <profile_file>")


if __name__ == "__main__":
    main()
