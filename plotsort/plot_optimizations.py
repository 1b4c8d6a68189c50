#
# Copyright 2023 Windell H. Oskay, Evil Mad Scientist Laboratories
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program; if not, write to the Free Software
# Foundation, Inc., 59 Temple Place, Suite 330, Boston, MA  02111-1307  USA

"""
plot_optimizations.py

This module provides the plot order optimization tools.

Part of plotsort, path sequencing for pen plotters

The included functions operate upon LayerItem and DocDigest objects,
where each PathItem holds a single flattened polyline.

These functions include:
(A) sort()
    - Perform nearest neighbor reordering of the paths in one layer
    - If bidirectional, allow paths to be reversed when sorting

(B) reorder()
    - Sort each layer of a DocDigest, layer by layer

The sort is a greedy heuristic: from the current pen position, always
draw the closest remaining path next. It is not an optimal tour, but it is
fast, and it is deterministic for a given input.
"""

import logging

from plotsort import path_objects
from plotsort import spatial_grid

logger = logging.getLogger(__name__)


def sort(layer_item, bidirectional=False):
    """
    Re-order the paths of a single layer, in place, to reduce pen-up travel.

    Start at position 0,0. While there are still paths left to sort, take
    the path with an end closest to the current position, and continue from
    its far end. If bidirectional is True, a path may be entered from its
    last vertex; it is then flipped so that it is drawn from that end.

    Paths with no vertices cannot be located. They are placed after all
    other paths, in their original order, and are never flipped.

    Inputs: layer_item: a path_objects.LayerItem object
            bidirectional (boolean) - True if paths can be reversed
    """

    paths = layer_item.paths
    endpoints = [(path.first_point(), path.last_point()) for path in paths]
    grid_index = spatial_grid.Index(endpoints, bidirectional)

    tour_path = []  # New order, as a list of path indices
    vertex = path_objects.ORIGIN # Starting position of plot

    while True:
        nearest = grid_index.pop_nearest(vertex)
        if nearest is None:
            break # Exhausted paths in the index; tour is complete

        path_number, rev_path = nearest
        next_path = paths[path_number]
        if rev_path:
            next_path.flip()
        tour_path.append(path_number)

        last_point = next_path.last_point()
        if last_point is not None:
            vertex = last_point

    while True:
        path_number = grid_index.pop_first()
        if path_number is None:
            break
        tour_path.append(path_number) # Unindexable path; original order and direction

    assert len(tour_path) == len(paths) and len(set(tour_path)) == len(paths),\
        "Spatial index returned an inconsistent set of paths"

    layer_item.paths = [paths[path_number] for path_number in tour_path]


def reorder(digest, reverse, progress_fun=None):
    """
    Perform layer-aware path sorting, re-ordering paths within each layer for speed.

    Assume that each layer is plotted starting at position 0,0. This may not
    be the case in all situations, but at least the _first_ layer will have
    reasonably short travel to the first point.

    Inputs: digest: a path_objects.DocDigest object
            reverse (boolean) - True if paths can be reversed
            progress_fun - Optional; called with the path count of each sorted layer
    """

    for layer_item in digest.layers:
        logger.debug('Sorting %d paths in layer "%s"', len(layer_item.paths), layer_item.name)
        sort(layer_item, reverse)
        if progress_fun is not None:
            progress_fun(len(layer_item.paths))
