#!/usr/bin/env python3

import unittest
import os, sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from island_supports.sample import (
        RATIO_EPS, SampleConfig, get_center_of_path, get_edge_point, get_offseted_point,
        get_point_on_path, sample_longest_path, sample_voronoi_graph)
from island_supports.voronoi_graph import ExPath, NoNeighborError, NoStartNodeError, VoronoiGraph

from fixtures import BRANCH, N3, START, make_graph, square_with_branch


class TestPointOnPath(unittest.TestCase):
    def setUp(self):
        self.graph = make_graph(
            [(0.0, 0.0), (4.0, 0.0), (10.0, 0.0), (10.0, 5.0)],
            [(0, 1, None), (1, 2, None), (2, 3, None)],
            on_contour=(0,))
        self.nodes = [0, 1, 2, 3]

    def test_inside_edge(self):
        self.assertEqual(get_point_on_path(self.graph, self.nodes, 7.0), (7.0, 0.0))
        point = get_point_on_path(self.graph, self.nodes, 12.0)
        self.assertAlmostEqual(point[0], 10.0)
        self.assertAlmostEqual(point[1], 2.0)

    def test_on_node(self):
        self.assertEqual(get_point_on_path(self.graph, self.nodes, 4.0), (4.0, 0.0))
        self.assertEqual(get_point_on_path(self.graph, self.nodes, 10.0), (10.0, 0.0))

    def test_clamped(self):
        self.assertEqual(get_point_on_path(self.graph, self.nodes, -3.0), (0.0, 0.0))
        self.assertEqual(get_point_on_path(self.graph, self.nodes, 0.0), (0.0, 0.0))
        self.assertEqual(get_point_on_path(self.graph, self.nodes, 100.0), (10.0, 5.0))

    def test_single_node(self):
        self.assertEqual(get_point_on_path(self.graph, [2], 5.0), (10.0, 0.0))

    def test_broken_path(self):
        with self.assertRaises(NoNeighborError):
            get_point_on_path(self.graph, [0, 2], 5.0)

    def test_center(self):
        point = get_center_of_path(self.graph, self.nodes, 15.0)
        self.assertAlmostEqual(point[0], 7.5)
        self.assertAlmostEqual(point[1], 0.0)

    def test_zero_length_edge(self):
        graph = make_graph(
            [(0.0, 0.0), (0.0, 0.0), (10.0, 0.0)],
            [(0, 1, 0.0), (1, 2, 10.0)])
        self.assertEqual(get_point_on_path(graph, [0, 1, 2], 5.0), (5.0, 0.0))
        self.assertEqual(get_point_on_path(graph, [2, 1, 0], 10.0), (0.0, 0.0))

    def test_curved_edge_measured_along_chord(self):
        """ The edge is 12 long but its ends are 10 apart. """
        graph = make_graph([(0.0, 0.0), (10.0, 0.0)], [(0, 1, 12.0)])
        self.assertEqual(get_point_on_path(graph, [0, 1], 6.0), (5.0, 0.0))
        self.assertEqual(get_point_on_path(graph, [0, 1], 3.0), (2.5, 0.0))

    def test_edge_point_snaps_to_ends(self):
        self.assertEqual(get_edge_point(self.graph, 1, 2, 1e-20), (4.0, 0.0))
        self.assertEqual(get_edge_point(self.graph, 1, 2, 1.0), (10.0, 0.0))

    def test_edge_point_snaps_within_float_epsilon(self):
        self.assertEqual(RATIO_EPS, sys.float_info.epsilon)
        self.assertEqual(get_edge_point(self.graph, 1, 2, sys.float_info.epsilon), (4.0, 0.0))
        self.assertEqual(
            get_edge_point(self.graph, 1, 2, 1.0 - sys.float_info.epsilon), (10.0, 0.0))
        self.assertEqual(get_edge_point(self.graph, 1, 2, 0.5), (7.0, 0.0))


class TestOffsetedPoint(unittest.TestCase):
    def setUp(self):
        self.graph = square_with_branch()

    def test_leaf(self):
        # START (-3, 0) to N1 (0, 0) is 3 long.
        point = get_offseted_point(self.graph, START, 1.0)
        self.assertAlmostEqual(point[0], -2.0)
        self.assertAlmostEqual(point[1], 0.0)

    def test_toward(self):
        # BRANCH (13, 14) to N3 (10, 10) is 5 long.
        point = get_offseted_point(self.graph, BRANCH, 2.5, N3)
        self.assertAlmostEqual(point[0], 11.5)
        self.assertAlmostEqual(point[1], 12.0)

    def test_no_padding(self):
        self.assertEqual(get_offseted_point(self.graph, START, 0.0), (-3.0, 0.0))

    def test_not_neighbors(self):
        with self.assertRaises(NoNeighborError):
            get_offseted_point(self.graph, START, 1.0, BRANCH)


class TestSampleLongestPath(unittest.TestCase):
    def setUp(self):
        self.graph = make_graph([(0.0, 0.0), (10.0, 0.0)], [(0, 1, None)], on_contour=(0,))
        self.path = ExPath([0, 1], 10.0)

    def test_short_path_gets_center(self):
        points = sample_longest_path(self.graph, self.path, SampleConfig(10.5, 2.0))
        self.assertEqual(points, [(5.0, 0.0)])

    def test_boundary_length_is_long(self):
        points = sample_longest_path(self.graph, self.path, SampleConfig(10.0, 2.0))
        self.assertEqual(len(points), 1)
        self.assertAlmostEqual(points[0][0], 2.0)
        self.assertAlmostEqual(points[0][1], 0.0)

    def test_single_node_path(self):
        points = sample_longest_path(self.graph, ExPath([1], 0.0), SampleConfig(0.0, 2.0))
        self.assertEqual(points, [(10.0, 0.0)])


class TestSampleVoronoiGraph(unittest.TestCase):
    def test_square_with_branch(self):
        graph = square_with_branch()
        points, longest_path = sample_voronoi_graph(graph, SampleConfig(100.0, 1.0))
        self.assertEqual(longest_path.length, 28.0)
        # Middle of the trunk, 14 along it: 1 along the top of the loop.
        self.assertEqual(len(points), 1)
        self.assertAlmostEqual(points[0][0], 1.0)
        self.assertAlmostEqual(points[0][1], 10.0)

    def test_long_path(self):
        graph = square_with_branch()
        points, longest_path = sample_voronoi_graph(graph, SampleConfig(20.0, 1.0))
        self.assertEqual(longest_path.nodes[0], START)
        self.assertAlmostEqual(points[0][0], -2.0)
        self.assertAlmostEqual(points[0][1], 0.0)

    def test_empty_graph(self):
        points, longest_path = sample_voronoi_graph(VoronoiGraph(), SampleConfig(10.0, 1.0))
        self.assertEqual(points, [])
        self.assertEqual(len(longest_path), 0)

    def test_no_contour_node(self):
        graph = make_graph([(0.0, 0.0), (1.0, 0.0)], [(0, 1, None)])
        with self.assertRaises(NoStartNodeError):
            sample_voronoi_graph(graph, SampleConfig(10.0, 1.0))


if __name__ == '__main__':
    unittest.main()
