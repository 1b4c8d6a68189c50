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
plot_status.py

Classes for managing plot statistics and reordering status

Part of plotsort, path sequencing for pen plotters

"""

from tqdm import tqdm

from plotink.plot_utils_import import from_dependency_import
text_utils = from_dependency_import('plotink.text_utils')

# Status codes, for PlotStatus.stopped
STATUS_OK = 0
STATUS_FILE_ERROR = 101     # Input file missing or unreadable
STATUS_PARSE_ERROR = 102    # Input is not well-formed XML


class LayerStats:  # pylint: disable=too-few-public-methods
    """
    LayerStats: Distances and counts for a single layer, in plot order.

    pen_up_length is the travel between consecutive paths: from the last
    vertex of each path to the first vertex of the next one. Paths with no
    vertices do not take part in the travel.
    """

    def __init__(self):
        self.name = ""
        self.path_count = 0
        self.vertex_count = 0
        self.pen_down_length = 0
        self.pen_up_length = 0

    @classmethod
    def from_layer(cls, layer_item):
        ''' Measure a path_objects.LayerItem '''
        stats = cls()
        stats.name = layer_item.name
        stats.path_count = len(layer_item.paths)
        stats.vertex_count = layer_item.vertex_count()

        last_point = None
        for path in layer_item.paths:
            stats.pen_down_length += path.length()
            if path.degenerate():
                continue
            if last_point is not None:
                stats.pen_up_length += last_point.distance(path.first_point())
            last_point = path.last_point()
        return stats


class DocStats:
    """ DocStats: Statistics about a whole document, one LayerStats per layer """

    def __init__(self):
        self.layers = []

    @classmethod
    def from_digest(cls, digest):
        ''' Measure every layer of a path_objects.DocDigest '''
        stats = cls()
        stats.layers = [LayerStats.from_layer(layer) for layer in digest.layers]
        return stats

    @property
    def path_count(self):
        ''' Total number of paths '''
        return sum(layer.path_count for layer in self.layers)

    @property
    def vertex_count(self):
        ''' Total number of vertices '''
        return sum(layer.vertex_count for layer in self.layers)

    @property
    def pen_down_length(self):
        ''' Total pen-down length, in user units '''
        return sum(layer.pen_down_length for layer in self.layers)

    @property
    def pen_up_length(self):
        ''' Total pen-up travel within layers, in user units '''
        return sum(layer.pen_up_length for layer in self.layers)

    def report(self, message_fun, before=None, elapsed_time=None):
        """
        report: Format and print distance statistics. If the statistics
        from before reordering are given, also report the change in pen-up travel.
        """
        message_fun(f"Layers: {len(self.layers)}, paths: {self.path_count}, " +\
            f"vertices: {self.vertex_count}")
        message_fun(f"Length of path to draw: {self.pen_down_length:1.3f}")
        if before is not None:
            message_fun(f"Pen-up travel distance: {before.pen_up_length:1.3f}" +\
                f" before reordering; {self.pen_up_length:1.3f} after.")
        else:
            message_fun(f"Pen-up travel distance: {self.pen_up_length:1.3f}")
        if elapsed_time is not None:
            message_fun("Reordering took " + text_utils.format_hms(elapsed_time))


class ProgressBar:
    """
    ProgressBar: Class to manage progress bar, currently used only by CLI API.
    Progress units are paths sorted.
    """

    def __init__(self):
        self.p_bar = None # Reference to TQDM progress bar object; None if not in use.
        self.enable = False

    def launch(self, total_paths):
        ''' Launch the progress bar, if enabled '''
        if not self.enable:
            return
        self.p_bar = tqdm(total=total_paths, mininterval=0.5, delay=0.5, position=0,
            desc='Reordering', leave=False, unit=" paths", ascii=True)

    def update(self, update_amount):
        ''' Add an integer amount to the progress shown '''
        if self.p_bar is None:
            return
        self.p_bar.update(update_amount)

    def close(self):
        ''' Close progress bar, if enabled '''
        if self.p_bar is not None:
            self.p_bar.close()
            self.p_bar = None


class PlotStatus:
    """
    PlotStatus: Data storage class for reordering status variables
    """

    def __init__(self):
        self.stopped = STATUS_OK # Status code. If a run is stopped, record why.
        self.cli_api = False
        self.progress = ProgressBar()
        self.stats_before = None
        self.stats_after = None

    def reset(self):
        ''' Reset attributes to defaults '''
        self.stopped = STATUS_OK
        self.stats_before = None
        self.stats_after = None
        self.progress.close()
