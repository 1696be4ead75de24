"""
Build the annotated voronoi diagram of an island outline and the skeleton
inside it.

The outline segments are sampled densely and scipy's (point) voronoi diagram
of the samples stands in for the segment voronoi diagram: ridges between
samples taken from different parts of the outline approximate the medial
axis. Ridges between consecutive samples along the outline are perpendicular
to the outline and are marked secondary.

Every voronoi vertex is categorised as inside, outside or on the outline of
the island using shapely, and every half-edge by the vertex it points to.
"""
from typing import List, Optional, Tuple

import math

import numpy as np
from scipy.spatial import Voronoi  # type: ignore
from shapely.geometry import Point, Polygon  # type: ignore
from shapely.validation import make_valid  # type: ignore

from island_supports.debug import Display
from island_supports.geometry import Line
from island_supports.helpers import EPS, Vertex, log, round_coord
from island_supports.sample import SampleConfig, sample_voronoi_graph
from island_supports.skeleton import (
        INFINITE, AnnotatedDiagram, DiagramCell, DiagramEdge, DiagramVertex,
        EdgeCategory, SourceCategory, build_skeleton)
from island_supports.voronoi_graph import ExPath, VertexCategory

# Outline sample count used when no spacing is given.
DEFAULT_SAMPLES = 400

Sample = Tuple[
    Vertex,
    int,             # Index of the segment the sample lies on.
    SourceCategory,
    int,             # Outline (ring) the sample belongs to.
    int,             # Position of the sample along its ring.
]


def polygon_segments(polygon: Polygon) -> List[List[Line]]:
    """ Outline of the polygon and its holes, one list of segments per ring. """
    rings: List[List[Line]] = []
    outlines = [polygon.exterior] + list(polygon.interiors)
    for outline in outlines:
        segments: List[Line] = []
        prev_point = None
        first_point = None
        for point in outline.coords:
            point = (point[0], point[1])
            if prev_point is None:
                first_point = point
                prev_point = point
            elif point == prev_point:
                continue
            else:
                segments.append((prev_point, point))
                prev_point = point
        assert prev_point == first_point  # This is a loop.
        rings.append(segments)
    return rings


def sample_outline(rings: List[List[Line]], spacing: float) -> List[Sample]:
    """
    Points along every segment, no further apart than spacing.
    A segment's start point is its first sample. Its end point is the start
    of the next segment.
    """
    samples: List[Sample] = []
    line_index = 0
    for ring_index, segments in enumerate(rings):
        position = 0
        for (x0, y0), (x1, y1) in segments:
            count = max(1, int(math.ceil(math.hypot(x1 - x0, y1 - y0) / spacing)))
            for step in range(count):
                ratio = step / count
                category = (SourceCategory.SegmentStartPoint if step == 0
                            else SourceCategory.InitialSegment)
                samples.append((
                    (x0 + (x1 - x0) * ratio, y0 + (y1 - y0) * ratio),
                    line_index, category, ring_index, position))
                position += 1
            line_index += 1
    return samples


def vertex_category(polygon: Polygon, point: Vertex, tolerance: float = EPS) -> VertexCategory:
    geom = Point(point)
    if polygon.boundary.distance(geom) <= tolerance:
        return VertexCategory.OnContour
    if polygon.contains(geom):
        return VertexCategory.Inside
    return VertexCategory.Outside


def edge_category(
        polygon: Polygon,
        start: Vertex,
        end: Vertex,
        start_category: VertexCategory,
        end_category: VertexCategory) -> EdgeCategory:
    """ Category of the half-edge start -> end. """
    if end_category == VertexCategory.Inside:
        return EdgeCategory.PointsInside
    if end_category == VertexCategory.Outside:
        return EdgeCategory.PointsOutside
    if start_category == VertexCategory.OnContour:
        # Both ends touch the outline. Whichever side the middle is on wins.
        middle = Point((start[0] + end[0]) / 2, (start[1] + end[1]) / 2)
        if polygon.contains(middle):
            return EdgeCategory.PointsInside
        return EdgeCategory.PointsOutside
    return EdgeCategory.PointsToContour


def construct_diagram(
        polygon: Polygon,
        spacing: Optional[float] = None) -> Tuple[AnnotatedDiagram, List[Line]]:
    """
    Voronoi diagram of the polygon's outline.

    Arguments:
        polygon: The island.
        spacing: Maximum distance between outline samples. Voronoi vertices
            closer than this to the outline count as being on it.
    Returns:
        (diagram, lines): The annotated diagram and the outline segments,
            indexed the same as the diagram's cell source indices.
    """
    if spacing is None:
        spacing = polygon.length / DEFAULT_SAMPLES
    rings = polygon_segments(polygon)
    lines = [line for segments in rings for line in segments]
    samples = sample_outline(rings, spacing)
    ring_sizes = [0] * len(rings)
    for sample in samples:
        ring_sizes[sample[3]] += 1

    voronoi = Voronoi(np.array([sample[0] for sample in samples]))

    diagram_vertices = []
    for x, y in voronoi.vertices:
        point = round_coord((float(x), float(y)))
        diagram_vertices.append(
            DiagramVertex(point[0], point[1], vertex_category(polygon, point, spacing + EPS)))

    diagram_cells = [DiagramCell(line_index, category)
                     for _, line_index, category, _, _ in samples]

    diagram_edges = []
    for (site_a, site_b), (vertex_a, vertex_b) in zip(
            voronoi.ridge_points, voronoi.ridge_vertices):
        site_a = int(site_a)
        site_b = int(site_b)
        ring_a, position_a = samples[site_a][3:]
        ring_b, position_b = samples[site_b][3:]
        # Consecutive samples along the outline.
        is_primary = not (ring_a == ring_b and
                          abs(position_a - position_b) in (1, ring_sizes[ring_a] - 1))

        if INFINITE in (vertex_a, vertex_b):
            category_ab = category_ba = EdgeCategory.PointsOutside
        else:
            start = diagram_vertices[vertex_a]
            end = diagram_vertices[vertex_b]
            category_ab = edge_category(
                polygon, (start.x, start.y), (end.x, end.y), start.category, end.category)
            category_ba = edge_category(
                polygon, (end.x, end.y), (start.x, start.y), end.category, start.category)

        edge_index = len(diagram_edges)
        diagram_edges.append(DiagramEdge(
            vertex_a, vertex_b, edge_index + 1, site_a, is_primary, True, category_ab))
        diagram_edges.append(DiagramEdge(
            vertex_b, vertex_a, edge_index, site_b, is_primary, True, category_ba))

    log(f"Voronoi diagram: {len(samples)} samples, {len(diagram_vertices)} vertices, "
        f"{len(diagram_edges)} half-edges", 2)
    return AnnotatedDiagram(diagram_vertices, diagram_edges, diagram_cells), lines


class VoronoiCenters:
    def __init__(self, polygon: Polygon, spacing: Optional[float] = None) -> None:
        """
        Arguments:
            polygon: The island we want to place supports inside.
            spacing: Resolution of the outline sampling. See construct_diagram().
        """
        self.polygon = polygon
        self._validate_poly()
        self.diagram, self.lines = construct_diagram(self.polygon, spacing)
        self.graph = build_skeleton(self.diagram, self.lines)

    def _validate_poly(self) -> None:
        """
        Make sure input geometry is sane.
        Do some quick fixes on common issues.
        """
        fixed = make_valid(self.polygon)
        while fixed.geom_type in ("MultiPolygon", "GeometryCollection"):
            # There is more than one choice for the island outline. Keep the biggest.
            biggest = None
            size = 0
            for geom in fixed.geoms:
                if geom.geom_type == "Polygon" and geom.area > size:
                    size = geom.area
                    biggest = geom
            if biggest is None:
                break
            fixed = make_valid(biggest)
        if fixed.geom_type == "Polygon":
            self.polygon = fixed

    def support_points(self, config: SampleConfig) -> Tuple[List[Vertex], ExPath]:
        """
        Returns:
            (points, longest_path): Support points for the island and the path
                through the skeleton they were sampled from.
        """
        points, longest_path = sample_voronoi_graph(self.graph, config)
        Display().display(self.graph, longest_path, [self.polygon], points)
        return points, longest_path
