"""
Place support points along the longest path of an island's skeleton.
"""
from typing import List, NamedTuple, Optional, Tuple

import sys

from island_supports.geometry import interpolate
from island_supports.helpers import Vertex, log
from island_supports.longest_path import create_longest_path
from island_supports.voronoi_graph import ExPath, NoNeighborError, VoronoiGraph

# Ratios closer than this to either end of an edge snap to that end.
RATIO_EPS = sys.float_info.epsilon

SampleConfig = NamedTuple("SampleConfig", [
    # Paths shorter than this get one support point in their middle.
    ("max_length_for_one_support_point", float),
    # How far in from the end of the path the first support point goes.
    ("start_distance", float),
])


def get_edge_point(graph: VoronoiGraph, from_node: int, to_node: int, ratio: float) -> Vertex:
    """
    Point part way along the edge from_node -> to_node.

    Parabolic edges are approximated by the straight line between their ends.
    TODO: Measure along the curve for parabolic edges. Lengths are already arc lengths.
    """
    start = graph[from_node].point
    end = graph[to_node].point
    if ratio <= RATIO_EPS:
        return start
    if ratio >= 1.0 - RATIO_EPS:
        return end
    return interpolate(start, end, ratio)


def get_point_on_path(graph: VoronoiGraph, nodes: List[int], distance: float) -> Vertex:
    """
    Point at distance along a path of nodes.

    The point lies on the first edge whose far end is at least distance from
    the start of the path, so a distance landing exactly on a node gives that
    node. Distances outside the path are clamped to its ends.
    """
    assert nodes
    if distance <= 0 or len(nodes) == 1:
        return graph[nodes[0]].point

    actual_distance = 0.0
    prev_node = nodes[0]
    for node in nodes[1:]:
        neighbor = graph.get_neighbor(prev_node, node)
        if neighbor is None:
            raise NoNeighborError(f"Path is broken between nodes {prev_node} and {node}.")
        actual_distance += neighbor.length
        if actual_distance >= distance:
            if neighbor.length <= 0:
                return graph[node].point
            over_ratio = (actual_distance - distance) / neighbor.length
            return get_edge_point(graph, prev_node, node, 1.0 - over_ratio)
        prev_node = node
    # Distance is beyond the end of the path.
    return graph[nodes[-1]].point


def get_center_of_path(graph: VoronoiGraph, nodes: List[int], length: float) -> Vertex:
    return get_point_on_path(graph, nodes, length / 2)


def get_offseted_point(
        graph: VoronoiGraph,
        node: int,
        padding: float,
        toward: Optional[int] = None) -> Vertex:
    """
    Move away from node along one of its edges.

    Arguments:
        node: Usually a leaf of the skeleton, touching the island outline.
        padding: Distance to move along a straight edge. The offset vector is
            the vector between the edge's ends scaled by padding / edge length.
        toward: Which neighbor to move toward. Only needed when node has more
            than one edge.
    """
    if toward is None:
        assert len(graph[node].neighbors) == 1
        neighbor = graph[node].neighbors[0]
    else:
        neighbor = graph.get_neighbor(node, toward)
        if neighbor is None:
            raise NoNeighborError(f"No skeleton edge between nodes {node} and {toward}.")

    start = graph[node].point
    end = graph[neighbor.node].point
    if neighbor.length <= 0:
        return start
    scale = padding / neighbor.length
    return (start[0] + (end[0] - start[0]) * scale,
            start[1] + (end[1] - start[1]) * scale)


def sample_longest_path(
        graph: VoronoiGraph,
        longest_path: ExPath,
        config: SampleConfig) -> List[Vertex]:
    """
    Support points for a path.

    A path shorter than config.max_length_for_one_support_point gets one point
    at its center. Anything at least that long gets a point
    config.start_distance in from its first node.
    """
    if longest_path.length < config.max_length_for_one_support_point:
        log(f"One support point for path of length {longest_path.length}", 2)
        return [get_center_of_path(graph, longest_path.nodes, longest_path.length)]

    if len(longest_path.nodes) < 2:
        return [graph[longest_path.nodes[0]].point]

    points = [get_offseted_point(
        graph, longest_path.nodes[0], config.start_distance, longest_path.nodes[1])]
    return points


def sample_voronoi_graph(
        graph: VoronoiGraph,
        config: SampleConfig) -> Tuple[List[Vertex], ExPath]:
    """
    Search the skeleton for its longest path and sample support points on it.

    An empty graph (the voronoi diagram was not annotated) yields no points.

    Returns:
        (points, longest_path)
    Raises:
        NoStartNodeError: No skeleton vertex lies on the island contour.
    """
    if not graph:
        log("Empty skeleton. Skipping island.")
        return [], ExPath()

    start_node = graph.contour_node()
    longest_path = create_longest_path(graph, start_node)
    return sample_longest_path(graph, longest_path, config), longest_path
