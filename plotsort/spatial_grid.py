# -*- coding: utf-8 -*-
# spatial_grid.py
# part of plotsort
#
# Copyright (c) 2022 Windell H. Oskay, Evil Mad Scientist Laboratories
#
# The MIT License (MIT)
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""
spatial_grid.py

Specialized grid spatial index class for finding, and removing,
the path end nearest to a given vertex.

Each indexed path has one or two entries in the grid: its first vertex,
and, if path reversal is allowed, its last vertex. Entries are identified
by an integer "key" in insertion order: 2 * i for the start of path i,
and 2 * i + 1 for its end. When two entries are at exactly the same
distance from the query vertex, the one with the lower key is returned.

Paths without a first vertex (empty paths) cannot be located on the grid;
they are held in an overflow queue and handed back in their original order.
"""

from collections import deque
import math

from plotink.plot_utils_import import from_dependency_import # plotink
plot_utils = from_dependency_import('plotink.plot_utils')


def grid_bins(path_count, reverse):
    '''
    Number of bins per side for a grid holding path_count paths.
    Reversal doubles the number of entries, so it earns a finer grid.
    '''
    if reverse:
        return 4 + math.floor(math.sqrt(path_count / 25))
    return 4 + math.floor(math.sqrt(path_count / 50))


def is_finite(vertex):
    ''' True if both coordinates of the vertex are finite numbers '''
    return math.isfinite(vertex[0]) and math.isfinite(vertex[1])


class Index:
    ''' Grid index class '''

    def __init__(self, endpoints, reverse, bins_per_side=None):
        '''
        Given an input list of path endpoints, populate a 1D list that
        represents a linearized 2D grid, bins_per_side x bins_per_side in size.
        Each cell contains a list of the entry keys located in that cell.

        Also populate a 1D "reverse" lookup list that gives the grid-cell
        location of each entry key, or None for keys that are not indexed.

        Input endpoints is a 1D list of elements: (first_vertex, last_vertex)
        for each path. Each vertex is an (x, y) pair, or None if the path
        has no vertices.

        reverse is boolean, indicating whether the paths can be reversed.

        bins_per_side defaults to grid_bins(). A value of 1 gives a single
        cell, which reduces the search to a linear scan.
        '''

        self.reverse = reverse
        self.path_count = len(endpoints)
        self.overflow = deque()    # Paths that cannot be indexed, in original order
        self.vertices = [None] * (2 * self.path_count) # Vertex of each entry key
        self.lookup = [None] * (2 * self.path_count)   # Grid cell of each entry key
        self.present = [False] * self.path_count       # Is path i still in the index?
        self.remaining = 0

        for index_i, (first, last) in enumerate(endpoints):
            if first is None:
                self.overflow.append(index_i)
                continue
            self.vertices[2 * index_i] = first
            if reverse:
                self.vertices[2 * index_i + 1] = first if last is None else last
            self.present[index_i] = True
            self.remaining += 1

        if bins_per_side is None:
            bins_per_side = grid_bins(self.remaining, reverse)
        if bins_per_side < 1:
            raise ValueError(f"bins_per_side must be at least 1, not {bins_per_side}")
        self.bins_per_side = bins_per_side
        max_bin = bins_per_side - 1

        # Calculate extent of grid, from the finite vertices only:
        self.xmin, self.ymin = math.inf, math.inf
        xmax, ymax = -math.inf, -math.inf
        for vertex in self.vertices:
            if vertex is None or not is_finite(vertex):
                continue
            self.xmin = min(self.xmin, vertex[0])
            xmax = max(xmax, vertex[0])
            self.ymin = min(self.ymin, vertex[1])
            ymax = max(ymax, vertex[1])
        if self.xmin > xmax: # No finite vertices at all
            self.xmin, self.ymin, xmax, ymax = 0.0, 0.0, 0.0, 0.0

        # Artificially increase size of grid to avoid vertices on the borders:
        shim = (xmax - self.xmin + ymax - self.ymin) / 200
        if shim == 0:
            shim = 1.0 # All vertices coincide
        self.xmin -= shim
        self.ymin -= shim
        xmax += shim
        ymax += shim

        # Calculate bin sizes:
        self.bin_size_x = (xmax - self.xmin) / bins_per_side
        self.bin_size_y = (ymax - self.ymin) / bins_per_side
        if not (0 < self.bin_size_x < math.inf and 0 < self.bin_size_y < math.inf):
            # Extent too wide to represent, or too narrow to split at this
            # magnitude: fall back to a single cell, i.e., a linear scan.
            bins_per_side = 1
            self.bins_per_side = 1
            max_bin = 0

        # Initialize the grid, with an empty list in each cell:
        self.grid = [[] for index_i in range(bins_per_side * bins_per_side)]

        for key, vertex in enumerate(self.vertices):
            if vertex is None:
                continue
            bins = self.find_bin(vertex) if is_finite(vertex) else None
            if bins is None: # Infinitely far from any finite vertex; any cell will do
                bins = (0, 0)
            x_bin, y_bin = bins
            grid_index = min(max(x_bin, 0), max_bin) +\
                bins_per_side * min(max(y_bin, 0), max_bin)
            self.grid[grid_index].append(key)
            self.lookup[key] = grid_index

    def __len__(self):
        ''' Number of paths still present in the grid '''
        return self.remaining

    def find_bin(self, vertex):
        '''
        Return the (x, y) bin coordinates of a finite vertex. These may lie
        outside of the grid, for a vertex that is outside of the grid.
        Return None if the vertex is too far away for its bin to be computed.
        '''
        if self.bins_per_side == 1:
            return 0, 0
        x_scaled = (vertex[0] - self.xmin) / self.bin_size_x
        y_scaled = (vertex[1] - self.ymin) / self.bin_size_y
        if not (math.isfinite(x_scaled) and math.isfinite(y_scaled)):
            return None
        return math.floor(x_scaled), math.floor(y_scaled)

    def ring_cells(self, x_bin, y_bin, ring):
        '''
        Yield the grid cells at Chebyshev distance `ring` from bin (x_bin, y_bin),
        skipping any positions that fall outside of the grid.
        '''
        max_bin = self.bins_per_side - 1
        if ring == 0:
            if 0 <= x_bin <= max_bin and 0 <= y_bin <= max_bin:
                yield x_bin + self.bins_per_side * y_bin
            return

        x_lo, x_hi = max(x_bin - ring, 0), min(x_bin + ring, max_bin)
        for y_row in (y_bin - ring, y_bin + ring): # Top and bottom rows
            if 0 <= y_row <= max_bin:
                for x_col in range(x_lo, x_hi + 1):
                    yield x_col + self.bins_per_side * y_row

        y_lo, y_hi = max(y_bin - ring + 1, 0), min(y_bin + ring - 1, max_bin)
        for x_col in (x_bin - ring, x_bin + ring): # Left and right columns, sans corners
            if 0 <= x_col <= max_bin:
                for y_row in range(y_lo, y_hi + 1):
                    yield x_col + self.bins_per_side * y_row

    def nearest(self, vertex_in):
        '''
        Find the nearest path end to the given vertex and return its key.
        Input vertex_in is an (x, y) pair.

        Method:
            * Locate which grid cell the input vertex is located in.
              (It may be a "virtual" cell outside of the grid.)
            * Check every entry in that cell, then in the ring of cells
              surrounding it, then in the next ring out, and so forth.
            * Once the best distance found is shorter than the distance to any
              cell not yet checked, stop: no other entry can be closer.

            * If no entries are left at all, return None

        Distances that are undefined (NaN) count as infinite. If the input
        vertex itself is not finite, or is too far away to place in a bin,
        every cell is checked.
        '''

        if self.remaining == 0:
            return None

        best_dist = math.inf
        best_key = None

        def check_cell(cell):
            nonlocal best_dist, best_key
            for key in self.grid[cell]:
                dist = plot_utils.square_dist(vertex_in, self.vertices[key])
                if dist != dist: # NaN
                    dist = math.inf
                if best_key is None or dist < best_dist or \
                        (dist == best_dist and key < best_key):
                    best_dist = dist
                    best_key = key

        bins = self.find_bin(vertex_in) if is_finite(vertex_in) else None
        if bins is None:
            for cell in range(len(self.grid)):
                check_cell(cell)
            return best_key

        max_bin = self.bins_per_side - 1
        x_bin, y_bin = bins
        cell_size = min(self.bin_size_x, self.bin_size_y)

        first_ring = max(-x_bin, x_bin - max_bin, -y_bin, y_bin - max_bin, 0)
        last_ring = max(x_bin, max_bin - x_bin, y_bin, max_bin - y_bin)

        for ring in range(first_ring, last_ring + 1):
            for cell in self.ring_cells(x_bin, y_bin, ring):
                check_cell(cell)
            # Cells beyond this ring are at least (ring - 1) cells away, with
            # one cell of slack for rounding at cell borders:
            bound = (ring - 1) * cell_size
            if best_key is not None and bound > 0 and best_dist < bound * bound:
                break
        return best_key

    def remove_path(self, path_index):
        '''
        Remove the entries of the path with the given path_index from the
        spatial index: its start and, if reversing is enabled, its end.
        '''
        if not self.present[path_index]:
            raise ValueError(f"Path {path_index} is not in the spatial index")

        for key in (2 * path_index, 2 * path_index + 1):
            cell_number = self.lookup[key]
            if cell_number is not None:
                self.grid[cell_number].remove(key)
                self.lookup[key] = None

        self.present[path_index] = False
        self.remaining -= 1

    def pop_nearest(self, vertex_in):
        '''
        Find the path with an end nearest to vertex_in, remove it from the index,
        and return (path_index, reverse). reverse is True when the nearest end
        was the last vertex of the path, which must then be flipped to be drawn
        starting from that end.

        Return None once no indexed paths remain.
        '''
        key = self.nearest(vertex_in)
        if key is None:
            return None
        path_index, end_key = divmod(key, 2)
        self.remove_path(path_index)
        return path_index, end_key == 1

    def pop_first(self):
        '''
        Return the index of the next path that could not be indexed, in
        original order, or None when there are none left.
        '''
        if self.overflow:
            return self.overflow.popleft()
        return None
