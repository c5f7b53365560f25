"""
graph/
-----
Core data layer.  Public API:

    from graph import Graph, Vertex, Edge
    from graph import VertexState, EdgeState
    from graph import generate_random_graph, layout_force_directed
"""

from graph.vertex    import Vertex, VertexState, vertex_label
from graph.edge      import Edge,   EdgeState
from graph.graph     import Graph,  GraphFormatError, circle_positions
from graph.generator import generate_random_graph, generate_preset, GraphPreset, PRESETS
from graph.layout    import layout_force_directed, compute_layout

__all__ = [
    "Vertex",    "VertexState", "vertex_label",
    "Edge",      "EdgeState",
    "Graph",     "GraphFormatError", "circle_positions",
    "generate_random_graph", "generate_preset", "GraphPreset", "PRESETS",
    "layout_force_directed", "compute_layout",
]
