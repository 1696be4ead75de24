"""
Debugging functions.

Nothing here is used to make decisions. It only draws what the search found.

Recognises the following environment variables:
    ISLAND_DEBUG: Set to enable any debug output. Default = not set.
    ISLAND_DEBUG_RES: (Optional) Resolution of output image in dpi. Default = 1000 dpi.
    ISLAND_DEBUG_FILENAME: (Optional) Specify output image filename. Default = /tmp/island.png
    ISLAND_DEBUG_SCREEN: (Optional) Attempt to output image to screen. Default = not set.
"""

import os

from typing import List, Optional

import matplotlib.pyplot as plt    # type: ignore
from shapely.geometry import MultiPolygon, Polygon  # type: ignore

from island_supports.helpers import Vertex
from island_supports.voronoi_graph import ExPath, VoronoiGraph

CIRCLE_COLOUR = "green"
SIDE_BRANCH_COLOUR = "blue"
TRUNK_COLOUR = "red"
GRAPH_COLOUR = "gray"


class Drawer:
    """
    Drawing primitives used by the draw_* functions.
    Subclass this to draw onto something other than matplotlib.
    """
    def polyline(self, points: List[Vertex], colour: str, width: float) -> None:
        raise NotImplementedError

    def point(self, point: Vertex, colour: str, size: float) -> None:
        raise NotImplementedError

    def text(self, point: Vertex, label: str, colour: str) -> None:
        raise NotImplementedError


class PyplotDrawer(Drawer):
    def polyline(self, points: List[Vertex], colour: str, width: float) -> None:
        x = [point[0] for point in points]
        y = [point[1] for point in points]
        plt.plot(x, y, c=colour, linewidth=width)

    def point(self, point: Vertex, colour: str, size: float) -> None:
        plt.plot(point[0], point[1], 'o', c=colour, markersize=size)

    def text(self, point: Vertex, label: str, colour: str) -> None:
        plt.text(point[0], point[1], label, color=colour, fontsize=2)


def draw_graph(drawer: Drawer, graph: VoronoiGraph, width: float = 0.1) -> None:
    for node in graph:
        drawer.point(node.point, "lightgray", width)
        for neighbor in node.neighbors:
            if neighbor.node < node.index:
                # Drawn from the other end.
                continue
            drawer.polyline([node.point, graph[neighbor.node].point], GRAPH_COLOUR, width)


def draw_path(
        drawer: Drawer,
        graph: VoronoiGraph,
        nodes: List[int],
        colour: str,
        width: float = 0.1,
        finish: bool = False) -> None:
    """
    Draw a path, labelling each node with its position in the path.

    Arguments:
        finish: Also draw the edge from the last node back to the first.
    """
    if not nodes:
        return
    prev_node: Optional[int] = nodes[-1] if finish else None
    for index, node in enumerate(nodes):
        if prev_node is None:
            prev_node = node
            continue
        start = graph[prev_node].point
        end = graph[node].point
        drawer.polyline([start, end], colour, width)
        drawer.text(start, str(index - 1 if index else len(nodes) - 1), colour)
        drawer.text(end, str(index), colour)
        prev_node = node


def draw_ex_path(drawer: Drawer, graph: VoronoiGraph, ex_path: ExPath, width: float = 0.1) -> None:
    for circle_index, circle in enumerate(ex_path.circles):
        draw_path(drawer, graph, circle.nodes, CIRCLE_COLOUR, width, finish=True)
        x = sum(graph[node].point[0] for node in circle.nodes) / len(circle.nodes)
        y = sum(graph[node].point[1] for node in circle.nodes) / len(circle.nodes)
        drawer.text((x, y), f"C{circle_index}", CIRCLE_COLOUR)

    for node, branches in ex_path.side_branches.items():
        for branch in branches:
            draw_path(drawer, graph, [node] + branch.nodes, SIDE_BRANCH_COLOUR, width)

    draw_path(drawer, graph, ex_path.nodes, TRUNK_COLOUR, width)


class Display:
    """
    Use matplotlib.pyplot to display outline of polygons, the skeleton and the
    longest path through it.
    """
    filename: str = "/tmp/island.png"
    resolution: int = 1000
    screen: bool = False
    initialised: bool = False

    def __init__(self) -> None:
        if not os.environ.get("ISLAND_DEBUG"):
            return

        if os.environ.get("ISLAND_DEBUG_RES"):
            self.resolution = int(os.environ["ISLAND_DEBUG_RES"])

        if os.environ.get("ISLAND_DEBUG_FILENAME"):
            self.filename = os.environ["ISLAND_DEBUG_FILENAME"]

        if os.environ.get("ISLAND_DEBUG_SCREEN"):
            self.screen = True

        print(f"Writing debug image: {self.filename} at resolution: {self.resolution} dpi")

        self.drawer = PyplotDrawer()
        self.initialised = True

    def display(self,
            graph: VoronoiGraph,
            ex_path: Optional[ExPath] = None,
            polygons: Optional[List[Polygon]] = None,
            points: Optional[List[Vertex]] = None) -> None:
        if not self.initialised:
            return

        plt.figure()
        plt.gca().set_aspect('equal')

        for multi in polygons or []:
            if multi.geom_type != "MultiPolygon":
                multi = MultiPolygon([multi])
            for polygon in multi.geoms:
                for ring in [polygon.exterior] + list(polygon.interiors):
                    self.drawer.polyline(list(ring.coords), "black", 0.1)

        draw_graph(self.drawer, graph)
        if ex_path is not None:
            draw_ex_path(self.drawer, graph, ex_path)
        for point in points or []:
            self.drawer.point(point, "black", 1)

        if self.filename:
            plt.savefig(self.filename, dpi=self.resolution, bbox_inches='tight')
        if self.screen:
            plt.show()
        plt.close()
