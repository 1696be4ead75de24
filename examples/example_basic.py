#!/usr/bin/env python3
"""
Place support points on an island.
This program is a demo which uses the library on a polygon read from a .wkt
file, or on a built in L shaped island if no file is given.

The demo shows the island outline, its skeleton, the longest path found
through the skeleton and the support points sampled from that path.
"""

import os
import sys

import matplotlib.pyplot as plt    # type: ignore
from shapely import wkt  # type: ignore
from shapely.geometry import Polygon  # type: ignore

# This line is required if you want to use the local version of the code.
# If you have installed island_supports via PIP it is not required.
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from island_supports import debug
from island_supports.sample import SampleConfig
from island_supports.voronoi_centers import VoronoiCenters

L_SHAPE = Polygon([(0, 0), (30, 0), (30, 8), (8, 8), (8, 25), (0, 25)])


def display_outline(shape, colour="blue"):
    """ Display the outline of the island. """
    x, y = shape.exterior.xy
    plt.plot(x, y, c=colour, linewidth=2)

    for interior in shape.interiors:
        x, y = interior.xy
        plt.plot(x, y, c=colour, linewidth=2)

def display_points(points, colour="black"):
    for point in points:
        plt.plot(point[0], point[1], 'o', c=colour, markersize=6)

def main(argv):
    """
    Example program making use of the support point search.
    """
    if len(argv) > 1:
        try:
            with open(argv[1]) as wkt_file:
                shape = wkt.loads(wkt_file.read())
        except IOError:
            print(f'Could not read {argv[1]}.')
            sys.exit(2)
    else:
        shape = L_SHAPE

    if len(argv) > 2:
        max_length = float(argv[2])
    else:
        max_length = 10

    print(f"max_length_for_one_support_point: {max_length}\n")

    centers = VoronoiCenters(shape)
    points, longest_path = centers.support_points(SampleConfig(max_length, 1.0))
    print(f"nodes: {len(centers.graph)}\t"
          f"circles: {len(longest_path.circles)}\t"
          f"path length: {round(longest_path.length, 3)}\t"
          f"points: {points}")

    display_outline(centers.polygon)
    drawer = debug.PyplotDrawer()
    debug.draw_graph(drawer, centers.graph)
    debug.draw_ex_path(drawer, centers.graph, longest_path, width=1)
    display_points(points)

    plt.gca().set_aspect('equal')
    plt.show()

if __name__ == "__main__":
    main(sys.argv)
