"""
Support point placement for islands of a sliced layer.

The medial axis of an island is taken from the voronoi diagram of its outline,
the longest path through it is found and support points are sampled along
that path.
"""
