"""
Data structures describing the skeleton of an island.

Nodes live in a dense arena inside VoronoiGraph and everything else refers to
them by integer index.
"""
from typing import Dict, Iterable, Iterator, List, NamedTuple, Optional, Set, Tuple

from enum import Enum
import heapq

from island_supports.helpers import Vertex


class VertexCategory(Enum):
    Unknown = 0
    Inside = 1
    Outside = 2
    OnContour = 3


class SkeletonError(ValueError):
    """ Base class for failures the caller is expected to handle. """


class NoStartNodeError(SkeletonError):
    """ The skeleton has no vertex touching the island contour. """


class NoNeighborError(SkeletonError):
    """ Two nodes were expected to share a skeleton edge but do not. """


Neighbor = NamedTuple("Neighbor", [
    ("node", int),          # Index of the node at the far end of the edge.
    ("edge", int),          # Voronoi half-edge, oriented away from the owning node.
    ("twin", int),          # The same edge seen from the far end.
    ("length", float),
    ("max_width", float),
])


class Node:
    def __init__(
            self,
            index: int,
            vertex: int,
            point: Vertex,
            distance: float,
            category: VertexCategory = VertexCategory.Inside) -> None:
        """
        Arguments:
            index: Position in the graph's node arena.
            vertex: Index of the voronoi vertex this node was created for.
            point: Coordinates of that vertex.
            distance: Distance from the vertex to the boundary segment that
                generated it.
            category: Where the vertex lies relative to the island.
        """
        self.index = index
        self.vertex = vertex
        self.point = point
        self.distance = distance
        self.category = category
        self.neighbors: List[Neighbor] = []

    def __repr__(self) -> str:
        return f"Node({self.index}, point={self.point}, neighbors={len(self.neighbors)})"


class VoronoiGraph:
    """ Weighted undirected graph built from the inner voronoi edges of an island. """

    def __init__(self) -> None:
        self.nodes: List[Node] = []
        self.vertex_to_node: Dict[int, int] = {}

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def __getitem__(self, index: int) -> Node:
        return self.nodes[index]

    def get_node(
            self,
            vertex: int,
            point: Vertex,
            distance: float,
            category: VertexCategory = VertexCategory.Inside) -> Node:
        """ Return the node for a voronoi vertex, creating it on first use. """
        index = self.vertex_to_node.get(vertex)
        if index is not None:
            return self.nodes[index]
        node = Node(len(self.nodes), vertex, point, distance, category)
        self.nodes.append(node)
        self.vertex_to_node[vertex] = node.index
        return node

    def add_edge(
            self,
            node_a: int,
            node_b: int,
            edge: int,
            twin: int,
            length: float,
            max_width: float = 0.0) -> None:
        """ Store both directions of a skeleton edge. """
        self.nodes[node_a].neighbors.append(Neighbor(node_b, edge, twin, length, max_width))
        self.nodes[node_b].neighbors.append(Neighbor(node_a, twin, edge, length, max_width))

    def contour_node(self) -> int:
        """ Index of the first node whose vertex lies on the island contour. """
        for node in self.nodes:
            if node.category == VertexCategory.OnContour:
                return node.index
        raise NoStartNodeError("Every island must have a skeleton vertex on its contour.")

    def get_neighbor(self, from_node: int, to_node: int) -> Optional[Neighbor]:
        for neighbor in self.nodes[from_node].neighbors:
            if neighbor.node == to_node:
                return neighbor
        return None

    def neighbor_distance(self, from_node: int, to_node: int) -> float:
        neighbor = self.get_neighbor(from_node, to_node)
        if neighbor is None:
            raise NoNeighborError(f"No skeleton edge between nodes {from_node} and {to_node}.")
        return neighbor.length

    def path_length(self, nodes: Iterable[int]) -> float:
        """ Sum of the edge lengths between consecutive nodes. """
        length = 0.0
        prev_node = None
        for node in nodes:
            if prev_node is not None:
                length += self.neighbor_distance(prev_node, node)
            prev_node = node
        return length

    def check_data(self) -> None:
        """ Sanity check data structures. """
        for node in self.nodes:
            assert self.vertex_to_node[node.vertex] == node.index
            for neighbor in node.neighbors:
                backs = [back for back in self.nodes[neighbor.node].neighbors
                         if back.edge == neighbor.twin]
                assert len(backs) == 1
                assert backs[0].node == node.index
                assert backs[0].twin == neighbor.edge
                assert backs[0].length == neighbor.length


class Path:
    """ Sequence of node indices and the summed length of the edges between them. """

    def __init__(self, nodes: Optional[List[int]] = None, length: float = 0.0) -> None:
        self.nodes: List[int] = list(nodes) if nodes else []
        self.length = length

    def append(self, node: int, length: float) -> None:
        self.nodes.append(node)
        self.length += length

    def __len__(self) -> int:
        return len(self.nodes)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self.nodes == other.nodes and self.length == other.length

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.nodes}, {self.length})"


class Circle(Path):
    """
    A loop found in the skeleton.
    nodes[0] is where the search entered the loop, the closing edge runs from
    nodes[-1] back to nodes[0] and is included in length.
    """


class SideBranches:
    """
    Paths hanging off one node, kept as a max-heap on length.
    Equal lengths come back in the order they were pushed.
    """

    def __init__(self) -> None:
        self._heap: List[Tuple[float, int, Path]] = []
        self._count = 0

    def push(self, path: Path) -> None:
        heapq.heappush(self._heap, (-path.length, self._count, path))
        self._count += 1

    def top(self) -> Path:
        return self._heap[0][2]

    def pop(self) -> Path:
        return heapq.heappop(self._heap)[2]

    def __len__(self) -> int:
        return len(self._heap)

    def __iter__(self) -> Iterator[Path]:
        """ Longest first. """
        return (entry[2] for entry in sorted(self._heap))


class CircleConnections:
    """
    Which circles share nodes with which.
    A union-find over circle indices; membership of a set is symmetric and
    transitive by construction.
    """

    def __init__(self) -> None:
        self._parent: Dict[int, int] = {}

    def find(self, index: int) -> int:
        root = index
        while self._parent.get(root, root) != root:
            root = self._parent[root]
        # Path compression.
        while index != root:
            next_index = self._parent[index]
            self._parent[index] = root
            index = next_index
        return root

    def connect(self, index_a: int, index_b: int) -> None:
        self._parent.setdefault(index_a, index_a)
        self._parent.setdefault(index_b, index_b)
        root_a = self.find(index_a)
        root_b = self.find(index_b)
        if root_a == root_b:
            return
        # Keep the smaller index as root so results do not depend on merge order.
        if root_b < root_a:
            root_a, root_b = root_b, root_a
        self._parent[root_b] = root_a

    def connected(self, index: int) -> Set[int]:
        """ All other circles in the same cluster as index. """
        if index not in self._parent:
            return set()
        root = self.find(index)
        return {other for other in list(self._parent)
                if other != index and self.find(other) == root}

    def merge(self, other: "CircleConnections", offset: int) -> None:
        """ Copy the connections of other, shifting its circle indices by offset. """
        for index in list(other._parent):
            self.connect(index + offset, other.find(index) + offset)

    def as_dict(self) -> Dict[int, Set[int]]:
        """ Mapping from circle index to the set of circles it is connected to. """
        return {index: self.connected(index) for index in sorted(self._parent)}

    def __contains__(self, index: int) -> bool:
        return index in self._parent

    def __bool__(self) -> bool:
        return bool(self._parent)


class ExPath(Path):
    """
    The trunk path plus everything the search discovered around it.
    """

    def __init__(self, nodes: Optional[List[int]] = None, length: float = 0.0) -> None:
        super().__init__(nodes, length)
        self.side_branches: Dict[int, SideBranches] = {}
        self.circles: List[Circle] = []
        self.connected_circles = CircleConnections()

    def add_side_branch(self, node: int, branch: Path) -> None:
        self.side_branches.setdefault(node, SideBranches()).push(branch)

    def longest_branch(self, node: int) -> Optional[Path]:
        branches = self.side_branches.get(node)
        if not branches:
            return None
        return branches.top()

    def append_neighbor_branch(self, other: "ExPath") -> int:
        """
        Move the side branches and circles of other into this ExPath.
        Circle indices of other are shifted past the circles already held here.

        Returns:
            The offset that was added to other's circle indices.
        """
        offset = len(self.circles)
        for node, branches in other.side_branches.items():
            assert node not in self.side_branches
            self.side_branches[node] = branches
        if other.circles:
            self.connected_circles.merge(other.connected_circles, offset)
            self.circles.extend(other.circles)
        other.side_branches = {}
        other.circles = []
        other.connected_circles = CircleConnections()
        return offset
