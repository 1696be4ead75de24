"""
Hand built skeletons shared by the tests.
"""
from typing import Dict, List, Optional, Tuple

import math
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from island_supports.voronoi_graph import VertexCategory, VoronoiGraph


def make_graph(
        points: List[Tuple[float, float]],
        edges: List[Tuple[int, int, Optional[float]]],
        on_contour: Tuple[int, ...] = ()) -> VoronoiGraph:
    """
    Nodes are created in the order of points. Edge lengths default to the
    straight distance between the points.
    """
    graph = VoronoiGraph()
    categories: Dict[int, VertexCategory] = {
        index: VertexCategory.OnContour for index in on_contour}
    for index, point in enumerate(points):
        graph.get_node(index, point, 1.0, categories.get(index, VertexCategory.Inside))
    for edge_index, (node_a, node_b, length) in enumerate(edges):
        if length is None:
            length = math.dist(points[node_a], points[node_b])
        graph.add_edge(node_a, node_b, edge_index * 2, edge_index * 2 + 1, length)
    graph.check_data()
    return graph


# Nodes of square_with_branch().
START, N1, N2, N3, N4, BRANCH = range(6)


def square_with_branch() -> VoronoiGraph:
    """
    A loop of 4 edges, each 10 long, entered from a contour node 3 away from N1.
    A branch of length 5 hangs off N3, opposite N1 on the loop.

        N2 ---- N3 -- BRANCH
        |       |
        |       |
    S - N1 ---- N4
    """
    points = [(-3, 0), (0, 0), (0, 10), (10, 10), (10, 0), (13, 14)]
    edges = [
        (START, N1, 3.0),
        (N1, N2, 10.0),
        (N2, N3, 10.0),
        (N3, N4, 10.0),
        (N4, N1, 10.0),
        (N3, BRANCH, 5.0),
    ]
    return make_graph(points, edges, on_contour=(START,))


def square() -> VoronoiGraph:
    points = [(0, 0), (0, 10), (10, 10), (10, 0)]
    edges = [(0, 1, 10.0), (1, 2, 10.0), (2, 3, 10.0), (3, 0, 10.0)]
    return make_graph(points, edges, on_contour=(0,))


def two_squares() -> VoronoiGraph:
    """
    Two loops sharing the edge 1 - 4. Start node 6 hangs off node 0 and a
    branch (node 7) hangs off node 5.

        3 ---- 4 ---- 5 -- 7
        |      |      |
    6 - 0 ---- 1 ---- 2
    """
    points = [(0, 0), (10, 0), (20, 0), (0, 10), (10, 10), (20, 10), (-3, 0), (23, 14)]
    edges = [
        (6, 0, 3.0),
        (0, 1, 10.0),
        (1, 2, 10.0),
        (0, 3, 10.0),
        (1, 4, 10.0),
        (2, 5, 10.0),
        (3, 4, 10.0),
        (4, 5, 10.0),
        (5, 7, 5.0),
    ]
    return make_graph(points, edges, on_contour=(6,))


def ladder(rungs: int) -> VoronoiGraph:
    """
    Two rails joined by rungs, many loops sharing nodes.
    Node 2 * i is on the bottom rail, 2 * i + 1 on the top. The last node is
    a contour leaf hanging off node 0.
    """
    points = []
    for index in range(rungs):
        points.append((index * 10.0, 0.0))
        points.append((index * 10.0, 7.0))
    points.append((-4.0, 0.0))
    edges: List[Tuple[int, int, Optional[float]]] = []
    for index in range(rungs):
        edges.append((2 * index, 2 * index + 1, None))
        if index + 1 < rungs:
            edges.append((2 * index, 2 * index + 2, None))
            edges.append((2 * index + 1, 2 * index + 3, None))
    edges.append((len(points) - 1, 0, None))
    return make_graph(points, edges, on_contour=(len(points) - 1,))
