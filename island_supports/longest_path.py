"""
Find a long path through the skeleton of an island.

Finding the longest simple path in a graph with loops is NP-hard, so this is
a single depth-first walk which records every loop ("circle") and every side
branch it passes, picks the longest way down at each node, and then fixes up
the result with one reshaping pass.

The walk does not recurse. It is driven by an explicit stack of work items so
a skeleton with thousands of nodes can not overflow the interpreter's stack.
"""
from typing import Dict, List, NamedTuple, Set, Tuple, Union

from island_supports.circles import resolve_circles
from island_supports.helpers import log
from island_supports.voronoi_graph import Circle, ExPath, Neighbor, Path, VoronoiGraph

# Work items for the depth-first walk.
# Expand: visit node, arriving from parent over the half-edge parent -> node.
Expand = NamedTuple("Expand", [
    ("node", int),
    ("parent", int),
    ("edge", int),
    ("length", float),
])
# Finish: every child of node has been walked. Combine their results.
Finish = NamedTuple("Finish", [
    ("node", int),
    ("children", Tuple[Neighbor, ...]),
])

# Result of walking the part of the graph below one node.
# ex_path: While walking, its trunk is stored leaf first and ends at the node.
# open_circles: Circles entered above this node that are not closed yet.
# pending: Circles whose cluster still has an open member. They are resolved
#     together once the last one closes.
Subtree = NamedTuple("Subtree", [
    ("ex_path", ExPath),
    ("open_circles", Set[int]),
    ("pending", Set[int]),
])

NO_PARENT = -1
NO_EDGE = -1


def _weight(subtree: Subtree) -> int:
    return len(subtree.ex_path.circles) + len(subtree.ex_path.side_branches)


class LongestPathSearch:
    """
    Depth-first walk from a start node.

    Circle indices in a Subtree refer to the circles of that Subtree's own
    ExPath. A node takes over the ExPath of its heaviest child and only the
    other children are folded into it, with their circle indices shifted.
    """

    def __init__(self, graph: VoronoiGraph) -> None:
        self.graph = graph
        self.parent_of: Dict[int, int] = {}
        self.results: Dict[int, Subtree] = {}
        self.circles_at: Dict[int, List[Circle]] = {}

        # The path from the start node to the node being walked.
        self.path_nodes: List[int] = []
        self.path_distances: List[float] = []
        self.path_position: Dict[int, int] = {}

    def run(self, start_node: int) -> ExPath:
        stack: List[Union[Expand, Finish]] = [Expand(start_node, NO_PARENT, NO_EDGE, 0.0)]
        while stack:
            task = stack.pop()
            if isinstance(task, Expand):
                self._expand(task, stack)
            else:
                self._finish(task)

        assert not self.path_nodes
        ex_path = self.results.pop(start_node).ex_path
        ex_path.nodes.reverse()
        return ex_path

    def _expand(self, task: Expand, stack: List[Union[Expand, Finish]]) -> None:
        node = task.node
        if node in self.parent_of:
            # Reached again over the closing edge of a circle that was
            # recorded from its other end.
            return
        self.parent_of[node] = task.parent

        distance = 0.0
        if self.path_nodes:
            assert self.path_nodes[-1] == task.parent
            distance = self.path_distances[-1] + task.length
        self.path_position[node] = len(self.path_nodes)
        self.path_nodes.append(node)
        self.path_distances.append(distance)

        children: List[Neighbor] = []
        child_nodes: Set[int] = set()
        circles: List[Circle] = []
        for neighbor in self.graph[node].neighbors:
            if neighbor.node == task.parent and neighbor.twin == task.edge:
                # The edge we arrived on.
                continue
            position = self.path_position.get(neighbor.node)
            if position is not None:
                circle = Circle(
                    self.path_nodes[position:],
                    distance - self.path_distances[position] + neighbor.length)
                circles.append(circle)
                log(f"Circle found: {circle.nodes} length {circle.length}", 2)
                continue
            if neighbor.node in child_nodes:
                # Parallel edge. The child records the loop it makes when it
                # finds this edge leading back to node.
                continue
            assert neighbor.node not in self.parent_of
            child_nodes.add(neighbor.node)
            children.append(neighbor)
        self.circles_at[node] = circles

        stack.append(Finish(node, tuple(children)))
        # Reversed so neighbors are walked in the order they are stored.
        for neighbor in reversed(children):
            stack.append(Expand(neighbor.node, node, neighbor.edge, neighbor.length))

    def _finish(self, task: Finish) -> None:
        node = task.node
        self.path_nodes.pop()
        self.path_distances.pop()
        del self.path_position[node]

        subtrees: List[Tuple[Subtree, float]] = []
        for neighbor in task.children:
            if self.parent_of[neighbor.node] != node:
                # Walked from somewhere else first.
                continue
            subtrees.append((self.results.pop(neighbor.node), neighbor.length))
        was_open = [bool(subtree.open_circles) for subtree, _ in subtrees]

        # One circle of each child's open circles. Those are already connected
        # to each other further down.
        through: List[int] = []
        if subtrees:
            adopted = max((subtree for subtree, _ in subtrees), key=_weight)
            ex_path = adopted.ex_path
            open_circles = adopted.open_circles
            pending = adopted.pending
            if open_circles:
                through.append(next(iter(open_circles)))
        else:
            adopted = None
            ex_path = ExPath()
            open_circles = set()
            pending = set()

        # Trunks below node, leaf first, with their length measured from node.
        candidates: List[Tuple[List[int], float]] = []
        for (subtree, length), is_open in zip(subtrees, was_open):
            assert is_open or not subtree.pending
            if subtree is not adopted:
                offset = ex_path.append_neighbor_branch(subtree.ex_path)
                if is_open:
                    through.append(next(iter(subtree.open_circles)) + offset)
                open_circles.update(index + offset for index in subtree.open_circles)
                pending.update(index + offset for index in subtree.pending)
            if not is_open:
                candidates.append((subtree.ex_path.nodes, subtree.ex_path.length + length))

        for circle in self.circles_at.pop(node):
            index = len(ex_path.circles)
            ex_path.circles.append(circle)
            open_circles.add(index)
            pending.add(index)
            through.append(index)

        # Every open circle passes through this node.
        for index in through[1:]:
            ex_path.connected_circles.connect(through[0], index)

        open_circles.difference_update(
            [index for index in open_circles if ex_path.circles[index].nodes[0] == node])

        if pending and not open_circles:
            # Last circle of the cluster closed here.
            path = resolve_circles(self.graph, node, pending, ex_path)
            candidates.append((path.nodes[::-1], path.length))
            pending = set()

        ex_path.nodes = [node]
        ex_path.length = 0.0
        if open_circles:
            # Node is part of a loop. Which way out is best is decided when
            # the loop is resolved so keep every option as a side branch.
            for nodes, length in candidates:
                ex_path.add_side_branch(node, Path(nodes[::-1], length))
        elif candidates:
            best = candidates[0]
            for candidate in candidates[1:]:
                if candidate[1] > best[1]:
                    best = candidate
            for candidate in candidates:
                if candidate is not best:
                    ex_path.add_side_branch(node, Path(candidate[0][::-1], candidate[1]))
            best[0].append(node)
            ex_path.nodes = best[0]
            ex_path.length = best[1]

        self.results[node] = Subtree(ex_path, open_circles, pending)


def search_longest_path(graph: VoronoiGraph, start_node: int) -> ExPath:
    """
    Walk the whole connected skeleton from start_node.

    Returns:
        The provisional ExPath. Its trunk starts at start_node and is the
        longest path found going away from it; it is not reshaped yet.
    """
    return LongestPathSearch(graph).run(start_node)


def reshape_longest_path(graph: VoronoiGraph, ex_path: ExPath) -> None:
    """
    Swap the trunk with side branches that are longer than the trunk walked so far.

    The trunk found by the search must start at the start node. The longest
    path does not have to, so walk the trunk and whenever a side branch is
    longer than the part of the trunk behind us, use the branch instead and
    keep the old beginning as a side branch.
    Running this again on its own result changes nothing.
    """
    assert len(ex_path.nodes) >= 1

    actual_length = 0.0
    prev_node = None
    origin_path = list(ex_path.nodes)
    # Index of node within ex_path.nodes.
    path_index = 0
    for node in origin_path:
        if prev_node is not None:
            path_index += 1
            actual_length += graph.neighbor_distance(prev_node, node)
        prev_node = node

        branches = ex_path.side_branches.get(node)
        if not branches:
            continue
        if actual_length >= branches.top().length:
            # No longer branch.
            continue

        new_main_branch = branches.pop()
        if path_index > 0:
            branches.push(Path(ex_path.nodes[path_index - 1::-1], actual_length))
        new_start = new_main_branch.nodes[::-1]
        ex_path.nodes = new_start + ex_path.nodes[path_index:]
        ex_path.length += new_main_branch.length - actual_length
        path_index = len(new_start)
        actual_length = new_main_branch.length


def create_longest_path(graph: VoronoiGraph, start_node: int) -> ExPath:
    """
    Longest path through the skeleton that the search can find.

    Arguments:
        graph: The island's skeleton.
        start_node: Where to start walking. Any node works; by convention it is
            a node on the island contour.
    """
    longest_path = search_longest_path(graph, start_node)
    reshape_longest_path(graph, longest_path)
    log(f"Longest path: {len(longest_path.nodes)} nodes, length {longest_path.length}, "
        f"{len(longest_path.circles)} circles")
    return longest_path
