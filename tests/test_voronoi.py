#!/usr/bin/env python3

import unittest
import os, sys
import math

from shapely.geometry import Point, Polygon  # type: ignore

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import island_supports.voronoi_centers as voronoi_centers
from island_supports.sample import SampleConfig
from island_supports.skeleton import EdgeCategory, SourceCategory
from island_supports.voronoi_graph import VertexCategory


class TestOutline(unittest.TestCase):
    def test_polygon_segments(self):
        polygon = Polygon(
            [(0, 0), (10, 0), (10, 10), (10, 10), (0, 10)],
            holes=[[(4, 4), (6, 4), (6, 6)]])
        rings = voronoi_centers.polygon_segments(polygon)
        self.assertEqual(len(rings), 2)
        # Repeated point dropped.
        self.assertEqual(len(rings[0]), 4)
        self.assertEqual(len(rings[1]), 3)
        for segments in rings:
            for index, segment in enumerate(segments):
                self.assertEqual(segment[1], segments[(index + 1) % len(segments)][0])

    def test_sample_outline(self):
        rings = [[((0.0, 0.0), (10.0, 0.0)), ((10.0, 0.0), (0.0, 0.0))]]
        samples = voronoi_centers.sample_outline(rings, 2.5)
        self.assertEqual(len(samples), 8)
        self.assertEqual(samples[0], ((0.0, 0.0), 0, SourceCategory.SegmentStartPoint, 0, 0))
        self.assertEqual(samples[1], ((2.5, 0.0), 0, SourceCategory.InitialSegment, 0, 1))
        self.assertEqual(samples[4][1:3], (1, SourceCategory.SegmentStartPoint))
        self.assertEqual([sample[4] for sample in samples], list(range(8)))

    def test_vertex_category(self):
        polygon = Polygon([(0, 0), (10, 0), (10, 10), (0, 10)])
        self.assertEqual(voronoi_centers.vertex_category(polygon, (5, 5)),
                         VertexCategory.Inside)
        self.assertEqual(voronoi_centers.vertex_category(polygon, (15, 5)),
                         VertexCategory.Outside)
        self.assertEqual(voronoi_centers.vertex_category(polygon, (10, 5)),
                         VertexCategory.OnContour)
        self.assertEqual(voronoi_centers.vertex_category(polygon, (9.5, 5), 1.0),
                         VertexCategory.OnContour)

    def test_edge_category(self):
        polygon = Polygon([(0, 0), (10, 0), (10, 10), (0, 10)])
        inside = VertexCategory.Inside
        contour = VertexCategory.OnContour
        self.assertEqual(
            voronoi_centers.edge_category(polygon, (10, 5), (5, 5), contour, inside),
            EdgeCategory.PointsInside)
        self.assertEqual(
            voronoi_centers.edge_category(polygon, (5, 5), (10, 5), inside, contour),
            EdgeCategory.PointsToContour)
        # Both ends on the outline, middle inside.
        self.assertEqual(
            voronoi_centers.edge_category(polygon, (0, 0), (10, 10), contour, contour),
            EdgeCategory.PointsInside)
        self.assertEqual(
            voronoi_centers.edge_category(polygon, (0, 0), (10, 0), contour, contour),
            EdgeCategory.PointsOutside)


class TestVoronoiCenters(unittest.TestCase):
    def verify_graph(self, vc):
        vc.graph.check_data()
        self.assertGreater(len(vc.graph), 0)
        for node in vc.graph:
            self.assertNotEqual(node.category, VertexCategory.Outside)
            self.assertTrue(vc.polygon.buffer(0.5).contains(Point(node.point)))

    def test_diagram_half_edges(self):
        polygon = Polygon([(0, 0), (20, 0), (20, 10), (0, 10)])
        diagram, lines = voronoi_centers.construct_diagram(polygon)
        self.assertEqual(len(lines), 4)
        self.assertEqual(len(diagram.edges) % 2, 0)
        for index, edge in enumerate(diagram.edges):
            twin = diagram.edges[edge.twin]
            self.assertEqual(twin.twin, index)
            self.assertEqual((twin.start, twin.end), (edge.end, edge.start))
            self.assertEqual(twin.is_primary, edge.is_primary)
        for cell in diagram.cells:
            self.assertLess(cell.source_index, len(lines))

    def test_rectangle(self):
        polygon = Polygon([(0, 0), (20, 0), (20, 10), (0, 10)])
        vc = voronoi_centers.VoronoiCenters(polygon)
        self.verify_graph(vc)

        points, longest_path = vc.support_points(SampleConfig(5.0, 1.0))
        # Corner to corner along the skeleton is 10 + 2 * 5 * sqrt(2).
        self.assertGreater(longest_path.length, 20.0)
        self.assertLess(longest_path.length, 26.0)
        self.assertAlmostEqual(
            vc.graph.path_length(longest_path.nodes), longest_path.length)
        self.assertEqual(len(points), 1)
        self.assertTrue(polygon.contains(Point(points[0])))

    def test_square_center(self):
        polygon = Polygon([(0, 0), (2, 0), (2, 2), (0, 2)])
        vc = voronoi_centers.VoronoiCenters(polygon)
        self.verify_graph(vc)

        points, longest_path = vc.support_points(SampleConfig(100.0, 1.0))
        self.assertEqual(len(points), 1)
        self.assertLess(math.dist(points[0], (1.0, 1.0)), 0.1)

    def test_island_with_hole(self):
        outer = [(0, 0), (20, 0), (20, 20), (0, 20)]
        hole = [(5, 5), (15, 5), (15, 15), (5, 15)]
        polygon = Polygon(outer, holes=[hole])
        vc = voronoi_centers.VoronoiCenters(polygon)
        self.verify_graph(vc)

        points, longest_path = vc.support_points(SampleConfig(5.0, 1.0))
        self.assertGreaterEqual(len(longest_path.circles), 1)
        self.assertGreater(longest_path.length, 20.0)
        self.assertTrue(polygon.contains(Point(points[0])))

    def test_invalid_polygon(self):
        """ Self intersecting outline. The biggest part is kept. """
        polygon = Polygon([(0, 0), (10, 10), (10, 0), (0, 10)])
        vc = voronoi_centers.VoronoiCenters(polygon)
        self.assertTrue(vc.polygon.is_valid)
        self.assertEqual(vc.polygon.geom_type, "Polygon")
        self.assertAlmostEqual(vc.polygon.area, 25.0)
        self.verify_graph(vc)


if __name__ == '__main__':
    unittest.main()
