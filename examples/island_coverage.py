#!/usr/bin/env python3

"""
Run the support point search against a set of test islands.
Look for inconsistencies between the skeleton, the path and the points.
"""

from typing import List, NamedTuple, Optional

import argparse
import os
from glob import glob
import signal
import sys
import time

import matplotlib.pyplot as plt  # type: ignore
from shapely import wkt  # type: ignore
from shapely.geometry import Point, Polygon  # type: ignore
from tabulate import tabulate

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from island_supports import debug
from island_supports.sample import SampleConfig
from island_supports.voronoi_centers import VoronoiCenters
from island_supports.voronoi_graph import SkeletonError

break_count: int = 0

ISLANDS = {
    "rectangle": Polygon([(0, 0), (20, 0), (20, 10), (0, 10)]),
    "square": Polygon([(0, 0), (2, 0), (2, 2), (0, 2)]),
    "l_shape": Polygon([(0, 0), (30, 0), (30, 8), (8, 8), (8, 25), (0, 25)]),
    "ring": Polygon(
        [(0, 0), (20, 0), (20, 20), (0, 20)],
        holes=[[(5, 5), (15, 5), (15, 15), (5, 15)]]),
    "two_holes": Polygon(
        [(0, 0), (30, 0), (30, 12), (0, 12)],
        holes=[[(4, 4), (12, 4), (12, 8), (4, 8)], [(18, 4), (26, 4), (26, 8), (18, 8)]]),
    "circle": Point(0, 0).buffer(10),
}

Result = NamedTuple("Result", [
    ("name", str),
    ("max_length", float),
    ("nodes", int),
    ("circles", int),
    ("path_length", float),
    ("points", int),
    ("points_inside", bool),
    ("time", float),
])


def signal_handler(_, __):
    """
    Count number of times ^C has been pressed.
    Exit gracefully after the 1st.
    Actually break after the 2nd.
    """
    global break_count
    break_count += 1
    if break_count >= 2:
        sys.exit(0)
    print('Ctrl+C pressed. Finishing existing test. Ctrl+C again to quit immediately.')


def init_argparse() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="A program to exercise the island support point search."
    )
    parser.add_argument(
        "-f", "--tofile",
        nargs='?',
        const="/tmp/islands",
        metavar="PATH",
        help="Save a .png of each island in the specified directory. "
        "If no directory specified, '/tmp/islands/' will be used."
    )
    parser.add_argument(
        "-s", "--toscreen",
        action='store_true',
        help="Display islands on screen")
    parser.add_argument(
        'input_paths',
        nargs='*',
        default=[],
        metavar="INPUT_PATH",
        help="Paths to .wkt files holding one polygon each. "
        "The built in islands are always tested.")
    return parser


def draw(
        centers: VoronoiCenters,
        result: Result,
        longest_path,
        points,
        output_path: Optional[str],
        output_display: bool
) -> None:
    """ Display the island, its skeleton and the support points. """
    plt.figure()
    plt.gca().set_aspect('equal')
    drawer = debug.PyplotDrawer()
    for ring in [centers.polygon.exterior] + list(centers.polygon.interiors):
        drawer.polyline(list(ring.coords), "black", 0.5)
    debug.draw_graph(drawer, centers.graph)
    debug.draw_ex_path(drawer, centers.graph, longest_path, 0.5)
    for point in points:
        drawer.point(point, "black", 3)

    if output_display:
        plt.show()

    if output_path:
        try:
            os.mkdir(output_path)
        except FileExistsError:
            pass
        except OSError:
            print(f"Could not create directory: {output_path}")
            plt.close()
            return

        new_filename = f"{result.name}_{result.max_length}.png"
        plt.savefig(os.path.join(output_path, new_filename))
    plt.close()


def test_island(
        name: str,
        polygon: Polygon,
        max_length: float,
        output_path: Optional[str],
        output_display: bool
) -> Result:
    """ Run the search on one island. """
    print(f"Trying: {name=}\t{max_length=}")

    time_run = time.time()
    centers = VoronoiCenters(polygon)
    points, longest_path = centers.support_points(SampleConfig(max_length, 1.0))
    time_run = time.time() - time_run

    centers.graph.check_data()
    assert abs(centers.graph.path_length(longest_path.nodes) - longest_path.length) < 1e-6

    result = Result(
        name,
        max_length,
        len(centers.graph),
        len(longest_path.circles),
        round(longest_path.length, 3),
        len(points),
        all(centers.polygon.contains(Point(point)) for point in points),
        round(time_run, 3),
    )

    if output_path or output_display:
        draw(centers, result, longest_path, points, output_path, output_display)

    return result


def load_islands(input_paths: List[str]):
    islands = dict(ISLANDS)
    filepaths = []
    for path in input_paths:
        filepaths += glob(path)
    for filepath in filepaths:
        with open(filepath) as wkt_file:
            islands[os.path.basename(filepath)] = wkt.loads(wkt_file.read())
    return islands


def main():
    """
    A program to exercise the island support point search.
    Run with --help parameter for usage info.
    """
    signal.signal(signal.SIGINT, signal_handler)

    parser = init_argparse()
    args = parser.parse_args()

    islands = load_islands(args.input_paths)
    output_path = args.tofile
    output_display = args.toscreen

    results = []
    max_lengths = [5.0, 50.0]
    count = 0
    total_count = len(islands) * len(max_lengths)
    for name, polygon in islands.items():
        for max_length in max_lengths:
            count += 1
            try:
                results.append(
                    test_island(name, polygon, max_length, output_path, output_display))
                print(f"{count} of {total_count}")
                print(results[-1])
                print()
            except SkeletonError as error:
                print(error)
                print(f"during: {name}\t{max_length}")
                raise error

            if break_count:
                break
        if break_count:
            break

    print(tabulate(results, headers="keys"))
    return 0


if __name__ == "__main__":
    main()
