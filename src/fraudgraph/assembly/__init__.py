"""
Visualization graph assembly for FraudGraph.
"""

from fraudgraph.assembly.assembler import AssembledGraph, GraphAssembler, build_graph

__all__ = [
    "AssembledGraph",
    "GraphAssembler",
    "build_graph",
]
