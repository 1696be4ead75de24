"""
Longest paths through loops of the skeleton.

A loop has no natural "downward" direction so the search cannot pick a trunk
through it while walking. Once the search is back at the node where it
entered a loop (or a cluster of loops sharing nodes) these functions pick the
best way through, using the side branches recorded on the loop's nodes.
"""
from typing import Dict, List, Optional, Set

import heapq

from island_supports.helpers import log
from island_supports.voronoi_graph import Circle, ExPath, Path, SideBranches, VoronoiGraph


def find_longest_path_on_circle(
        graph: VoronoiGraph,
        circle: Circle,
        side_branches: Dict[int, SideBranches]) -> Path:
    """
    Best path from the circle's entry node, round the loop, into a side branch.

    Each node is reached by the shorter way round. The node with the largest
    (distance round the loop + longest side branch) wins; on equal values the
    first one visited is kept and the forward direction is preferred.
    The winning branch is removed from side_branches as it becomes part of
    the returned path.

    Returns:
        Path starting after circle.nodes[0].
    """
    distance_on_circle = 0.0
    best_position: Optional[int] = None
    best_length = -1.0
    best_reverse = False
    farthest_position = 1
    farthest_length = -1.0
    farthest_reverse = False

    prev_node = None
    for position, node in enumerate(circle.nodes):
        if prev_node is not None:
            distance_on_circle += graph.neighbor_distance(prev_node, node)
        prev_node = node
        if position == 0:
            continue

        reverse = circle.length - distance_on_circle < distance_on_circle
        to_node = circle.length - distance_on_circle if reverse else distance_on_circle

        if to_node > farthest_length:
            farthest_position = position
            farthest_length = to_node
            farthest_reverse = reverse

        branches = side_branches.get(node)
        if not branches:
            continue
        length = to_node + branches.top().length
        if length > best_length:
            best_position = position
            best_length = length
            best_reverse = reverse

    if best_position is None:
        # Loop with nothing hanging off it.
        return Path(
            _circle_arc(circle, farthest_position, farthest_reverse), farthest_length)

    node = circle.nodes[best_position]
    branch = side_branches[node].pop()
    arc = _circle_arc(circle, best_position, best_reverse)
    return Path(arc + branch.nodes, best_length)


def _circle_arc(circle: Circle, position: int, reverse: bool) -> List[int]:
    """ Nodes from just after the entry to circle.nodes[position]. """
    if reverse:
        return circle.nodes[position:][::-1]
    return circle.nodes[1:position + 1]


def find_longest_path_on_circles(
        graph: VoronoiGraph,
        entry: int,
        circle_indices: Set[int],
        ex_path: ExPath) -> Path:
    """
    Best path through a cluster of circles that share nodes.

    Shortest distances from entry are found over the nodes of the cluster
    only (Dijkstra; no recursion). Each settled node with side branches scores
    its distance plus its longest branch and the best scoring node wins.

    Returns:
        Path starting after entry.
    """
    nodes: Set[int] = set()
    for circle_index in circle_indices:
        nodes.update(ex_path.circles[circle_index].nodes)
    assert entry in nodes

    previous: Dict[int, Optional[int]] = {}
    distances: Dict[int, float] = {}
    best_node: Optional[int] = None
    best_length = -1.0
    farthest_node = entry
    farthest_length = -1.0

    # On top is the shortest path.
    count = 0
    queue = [(0.0, count, entry, None)]
    while queue:
        distance, _, node, prev_node = heapq.heappop(queue)
        if node in distances:
            # Already settled.
            continue
        distances[node] = distance
        previous[node] = prev_node

        if node != entry:
            if distance > farthest_length:
                farthest_node = node
                farthest_length = distance
            branch = ex_path.longest_branch(node)
            if branch is not None and distance + branch.length > best_length:
                best_node = node
                best_length = distance + branch.length

        for neighbor in graph[node].neighbors:
            if neighbor.node not in nodes or neighbor.node in distances:
                continue
            count += 1
            heapq.heappush(queue, (distance + neighbor.length, count, neighbor.node, node))

    end_node = farthest_node if best_node is None else best_node
    route: List[int] = []
    node = end_node
    while node != entry:
        route.append(node)
        node = previous[node]
    route.reverse()

    if best_node is None:
        return Path(route, farthest_length)

    branch = ex_path.side_branches[best_node].pop()
    return Path(route + branch.nodes, best_length)


def resolve_circles(
        graph: VoronoiGraph,
        entry: int,
        circle_indices: Set[int],
        ex_path: ExPath) -> Path:
    """ Longest path from entry through one circle or a cluster of connected ones. """
    if len(circle_indices) == 1:
        circle = ex_path.circles[next(iter(circle_indices))]
        path = find_longest_path_on_circle(graph, circle, ex_path.side_branches)
    else:
        path = find_longest_path_on_circles(graph, entry, circle_indices, ex_path)
    log(f"Resolved circles {sorted(circle_indices)} at node {entry}: "
        f"length {path.length}", 2)
    return path
