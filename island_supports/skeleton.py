"""
Turn an annotated voronoi diagram of an island outline into a VoronoiGraph.

The diagram is described with plain tuples so it can come from scipy (see
voronoi_centers.py) or be written by hand. Edge categories and source
categories follow Boost.Polygon's segment voronoi diagram.
"""
from typing import List, NamedTuple

from enum import Enum

from island_supports.geometry import (
        Line, parabola_length, perp_distance, point_distance, segment_distance)
from island_supports.helpers import Vertex, log
from island_supports.voronoi_graph import VertexCategory, VoronoiGraph


class EdgeCategory(Enum):
    """ Category of a half-edge, judged by the vertex it points to. """
    Unknown = 0
    PointsInside = 1
    PointsOutside = 2
    PointsToContour = 3

class SourceCategory(Enum):
    """ What generated a voronoi cell. Values match Boost.Polygon. """
    SinglePoint = 0x0
    SegmentStartPoint = 0x1
    SegmentEndPoint = 0x2
    InitialSegment = 0x8
    ReverseSegment = 0x9


# Index used for the missing end of an unbounded edge.
INFINITE = -1

DiagramVertex = NamedTuple("DiagramVertex", [
    ("x", float),
    ("y", float),
    ("category", VertexCategory),
])

DiagramEdge = NamedTuple("DiagramEdge", [
    ("start", int),
    ("end", int),
    ("twin", int),
    ("cell", int),
    ("is_primary", bool),
    ("is_linear", bool),
    ("category", EdgeCategory),
])

class DiagramCell(NamedTuple):
    source_index: int
    source_category: SourceCategory

    @property
    def contains_point(self) -> bool:
        return self.source_category in (
            SourceCategory.SinglePoint,
            SourceCategory.SegmentStartPoint,
            SourceCategory.SegmentEndPoint)

    @property
    def contains_segment(self) -> bool:
        return not self.contains_point

AnnotatedDiagram = NamedTuple("AnnotatedDiagram", [
    ("vertices", List[DiagramVertex]),
    ("edges", List[DiagramEdge]),
    ("cells", List[DiagramCell]),
])


def vertex_point(diagram: AnnotatedDiagram, vertex_index: int) -> Vertex:
    vertex = diagram.vertices[vertex_index]
    return (vertex.x, vertex.y)


def retrieve_point(lines: List[Line], cell: DiagramCell) -> Vertex:
    """ The segment end point that generated a point cell. """
    assert cell.source_category in (
        SourceCategory.SegmentStartPoint, SourceCategory.SegmentEndPoint)
    line = lines[cell.source_index]
    if cell.source_category == SourceCategory.SegmentStartPoint:
        return line[0]
    return line[1]


def get_parabola(diagram: AnnotatedDiagram, edge_index: int, lines: List[Line]):
    """
    Generators of a curved edge.

    Returns:
        (focus, directrix): The segment end point and the opposite segment.
    """
    edge = diagram.edges[edge_index]
    assert not edge.is_linear
    cell = diagram.cells[edge.cell]
    twin_cell = diagram.cells[diagram.edges[edge.twin].cell]
    point_cell = cell if cell.contains_point else twin_cell
    line_cell = cell if cell.contains_segment else twin_cell
    assert point_cell.contains_point
    assert line_cell.contains_segment
    return retrieve_point(lines, point_cell), lines[line_cell.source_index]


def calculate_length(diagram: AnnotatedDiagram, edge_index: int, lines: List[Line]) -> float:
    edge = diagram.edges[edge_index]
    start = vertex_point(diagram, edge.start)
    end = vertex_point(diagram, edge.end)
    if edge.is_linear:
        return point_distance(start, end)
    focus, directrix = get_parabola(diagram, edge_index, lines)
    return parabola_length(focus, directrix, start, end)


def calculate_max_width(diagram: AnnotatedDiagram, edge_index: int, lines: List[Line]) -> float:
    """
    Twice the largest distance between the edge's end points and the geometry
    that generated it. Approximates how thick the island is along this edge.
    """
    edge = diagram.edges[edge_index]
    start = vertex_point(diagram, edge.start)
    end = vertex_point(diagram, edge.end)
    if edge.is_linear:
        line = lines[diagram.cells[edge.cell].source_index]
        return 2 * max(perp_distance(line, start), perp_distance(line, end))
    # Both ends are equidistant from the focus and the directrix.
    focus, _ = get_parabola(diagram, edge_index, lines)
    return 2 * max(point_distance(focus, start), point_distance(focus, end))


def _skip_edge(diagram: AnnotatedDiagram, edge_index: int) -> bool:
    edge = diagram.edges[edge_index]
    if not edge.is_primary:
        return True
    if edge.start == INFINITE or edge.end == INFINITE:
        return True
    # Skip the twin of an edge that has already been processed.
    if edge_index > edge.twin:
        return True
    twin = diagram.edges[edge.twin]
    if (edge.category != EdgeCategory.PointsInside and
            twin.category != EdgeCategory.PointsInside):
        # Outer edge.
        return True
    return False


def build_skeleton(diagram: AnnotatedDiagram, lines: List[Line]) -> VoronoiGraph:
    """
    Collect the voronoi edges inside the island into a graph.

    Arguments:
        diagram: Voronoi diagram of the island outline with every vertex and
            half-edge categorised.
        lines: The outline segments, indexed the same as the cells' source_index.
    Returns:
        The skeleton. Empty if the diagram was not annotated.
    """
    skeleton = VoronoiGraph()
    for edge_index, edge in enumerate(diagram.edges):
        if _skip_edge(diagram, edge_index):
            continue

        category0 = diagram.vertices[edge.start].category
        category1 = diagram.vertices[edge.end].category
        if VertexCategory.Outside in (category0, category1):
            continue
        if VertexCategory.Unknown in (category0, category1):
            log(f"Voronoi diagram is not annotated. Vertex {edge.start} or {edge.end} "
                "has unknown category.")
            return VoronoiGraph()

        length = calculate_length(diagram, edge_index, lines)
        max_width = calculate_max_width(diagram, edge_index, lines)

        line = lines[diagram.cells[edge.cell].source_index]
        start = vertex_point(diagram, edge.start)
        end = vertex_point(diagram, edge.end)
        node0 = skeleton.get_node(
            edge.start, start, segment_distance(line, start), category0)
        node1 = skeleton.get_node(
            edge.end, end, segment_distance(line, end), category1)

        skeleton.add_edge(node0.index, node1.index, edge_index, edge.twin, length, max_width)

    log(f"Skeleton: {len(skeleton)} nodes, "
        f"{sum(len(node.neighbors) for node in skeleton) // 2} edges", 2)
    return skeleton

