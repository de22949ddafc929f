"""
Graph inspection helpers.
Print and summarize the structure of a compute graph.
"""

import numpy as np
from typing import Dict, Union
from collections import Counter

from .graph import ComputeGraph
from .node import Node


def _as_graph(graph: Union[ComputeGraph, Node]) -> ComputeGraph:
    return graph if isinstance(graph, ComputeGraph) else ComputeGraph(graph)


def get_graph_stats(graph: Union[ComputeGraph, Node]) -> Dict:
    """
    Structure statistics of a graph (no printing).

    Fan-in counts a node's children; fan-out counts its parents inside the
    graph (consumers outside the graph are ignored).

    Returns:
        dict with nodes, edges, max/avg fan-in, max/avg fan-out, operations
    """
    graph = _as_graph(graph)
    nodes = graph.sorted_nodes

    n_nodes = len(nodes)
    members = {id(n) for n in nodes}
    fan_ins = [len(n.children) for n in nodes]
    fan_outs = [sum(1 for p in n.parents if id(p) in members) for n in nodes]
    op_counter = Counter(n.op_tag for n in nodes)

    return {
        'nodes': n_nodes,
        'edges': sum(fan_ins),
        'max_fan_in': max(fan_ins),
        'avg_fan_in': float(np.mean(fan_ins)),
        'max_fan_out': max(fan_outs),
        'avg_fan_out': float(np.mean(fan_outs)),
        'operations': dict(op_counter),
    }


def print_graph_summary(graph: Union[ComputeGraph, Node], detailed: bool = False) -> Dict:
    """
    Print a summary of the graph.

    Args:
        graph: ComputeGraph or root Node
        detailed: also print the node list (graphs of up to 100 nodes)

    Returns:
        the dict from get_graph_stats
    """
    graph = _as_graph(graph)
    stats = get_graph_stats(graph)
    n_nodes = stats['nodes']

    print("\n" + "=" * 70)
    print("COMPUTATION GRAPH SUMMARY")
    print("=" * 70)
    print(f"Total nodes:        {n_nodes:,}")
    print(f"Total edges:        {stats['edges']:,}")
    print(f"Max fan-in:         {stats['max_fan_in']}")
    print(f"Avg fan-in:         {stats['avg_fan_in']:.2f}")
    print(f"Max fan-out:        {stats['max_fan_out']}")
    print(f"Avg fan-out:        {stats['avg_fan_out']:.2f}")
    print()
    print("Operation breakdown:")
    for op_type, count in Counter(stats['operations']).most_common(10):
        pct = 100.0 * count / n_nodes
        print(f"  {op_type:12s}: {count:6,} ({pct:5.1f}%)")

    if detailed and n_nodes <= 100:
        print()
        print("=" * 70)
        print("DETAILED NODE LIST")
        print("=" * 70)
        _print_nodes(graph, n_nodes)

    print("=" * 70 + "\n")
    return stats


def _print_nodes(graph: ComputeGraph, n_show: int) -> None:
    index = {id(n): i for i, n in enumerate(graph.sorted_nodes)}
    for i, node in enumerate(graph.sorted_nodes[:n_show]):
        if node.children:
            child_info = ", ".join(f"Node{index[id(c)]}" for c in node.children)
            print(f"Node {i:4d}: {node.op_tag:12s} ({float(node.value):10.6f}) <- [{child_info}]")
        else:
            print(f"Node {i:4d}: {node.op_tag:12s} ({float(node.value):10.6f}) [leaf/input]")


def print_computation_graph(graph: Union[ComputeGraph, Node], max_nodes: int = 20) -> None:
    """
    Print the graph structure, root first.

    Args:
        graph: ComputeGraph or root Node
        max_nodes: how many nodes to print at most
    """
    graph = _as_graph(graph)
    print("\n" + "=" * 70)
    print("COMPUTATION GRAPH STRUCTURE")
    print("=" * 70)

    _print_nodes(graph, min(len(graph), max_nodes))
    if len(graph) > max_nodes:
        print(f"... ({len(graph) - max_nodes} more nodes)")

    print("=" * 70 + "\n")


def analyze_graph_complexity(graph: Union[ComputeGraph, Node]) -> str:
    """
    Text report on graph size and its most common operations.
    """
    stats = get_graph_stats(graph)

    report = []
    report.append("Graph Complexity Analysis:")
    report.append(f"  Total operations: {stats['nodes']:,}")
    report.append(f"  Total connections: {stats['edges']:,}")
    report.append(f"  Average branching: {stats['avg_fan_out']:.2f}")

    if stats['nodes'] < 1000:
        complexity = "Low"
    elif stats['nodes'] < 10000:
        complexity = "Medium"
    else:
        complexity = "High"
    report.append(f"  Complexity level: {complexity}")

    top_ops = sorted(stats['operations'].items(), key=lambda x: x[1], reverse=True)[:3]
    report.append("  Top operations:")
    for op, count in top_ops:
        pct = 100.0 * count / stats['nodes']
        report.append(f"    - {op}: {pct:.1f}%")

    return "\n".join(report)
