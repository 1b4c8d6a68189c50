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
path_objects.py

Classes and functions for working with simplified path objects

Part of plotsort, path sequencing for pen plotters

The primary classes defined by this module are:
* Point: A single XY vertex

* PathItem: An object corresponding to a single flattened polyline; one pen stroke

* LayerItem: An object corresponding to a single SVG layer

* DocDigest: An object corresponding to a single SVG document

In each case, the formats supported here are ones that can be mapped
to a very limited subset of SVG: the "Plob" (plot object), where the root
holds only layers and layers hold only polylines.
"""

from typing import NamedTuple

from lxml import etree

from plotink.plot_utils_import import from_dependency_import # plotink
plot_utils = from_dependency_import('plotink.plot_utils')
inkex = from_dependency_import('ink_extensions.inkex')

PLOB_BASE = """<?xml version="1.0" standalone="no"?>
<svg
   xmlns:dc="http://purl.org/dc/elements/1.1/"
   xmlns:cc="http://creativecommons.org/ns#"
   xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#"
   xmlns:svg="http://www.w3.org/2000/svg"
   xmlns="http://www.w3.org/2000/svg"
   xmlns:inkscape="http://www.inkscape.org/namespaces/inkscape"
   xmlns:sodipodi="http://sodipodi.sourceforge.net/DTD/sodipodi-0.dtd"
   version="1.1">
   </svg>
"""

ROOT_LAYER_NAME = '__digest-root__'
CLOSED_TOLERANCE = 0.0001 # Max gap between the ends of a closed path, user units


class Point(NamedTuple):
    """
    Immutable 2D vertex. Equality is exact floating-point equality;
    quantize coordinates beforehand if a fuzzy comparison is wanted.
    """
    x: float
    y: float

    def square_dist(self, other):
        ''' Squared euclidean distance to another point '''
        return plot_utils.square_dist(self, other)

    def distance(self, other):
        ''' Euclidean distance to another point '''
        return plot_utils.distance(other[0] - self.x, other[1] - self.y)


ORIGIN = Point(0.0, 0.0)


class PathItem:
    """
    PathItem: An object corresponding to a single flattened SVG path

    Each PathItem instance contains the following elements:
    - vertices: A list of Point objects; may be empty
    - stroke: stroke color or None
    - item_id: A unique ID string

    The vertex list represents a single sequence of pen-down motion
    segments without pen lifts, equivalent to the path data in an SVG
    polyline object. Curves are flattened before they reach a PathItem.

    A PathItem with no vertices has no defined first or last point. Such a
    path is "degenerate": it is carried along but cannot be spatially indexed.
    """

    def __init__(self, vertices=None):
        self.vertices = [] if vertices is None else [Point(*vertex) for vertex in vertices]
        self.stroke = None      # stroke color or None
        self.item_id = None     # string

    @classmethod
    def from_attrs(cls, **kwargs):
        ''' Populate class from attribute keywords '''
        path_item = cls(kwargs.pop("vertices", None))
        path_item.stroke = kwargs.pop("stroke", None)
        path_item.item_id = kwargs.pop("item_id", None)
        return path_item

    def to_string(self):
        """
        Convert the list of vertices to an SVG polyline "points" attribute
        string and return that string.
        """
        return vertex_list_to_string(self.vertices)

    def from_string(self, polyline_string):
        """
        Fill the list of vertices, given a svg polyline "points"
        attribute string. Unparseable input leaves the path empty.
        """
        vertex_list = polyline_string_to_list(polyline_string)
        self.vertices = [] if vertex_list is None else vertex_list

    def first_point(self):
        """ Return first vertex, or None if the path is empty """
        if self.vertices:
            return self.vertices[0]
        return None

    def last_point(self):
        """ Return last vertex, or None if the path is empty """
        if self.vertices:
            return self.vertices[-1]
        return None

    def degenerate(self):
        """ True if the path has no defined first point and cannot be indexed """
        return self.first_point() is None

    def flip(self):
        """
        Reverse the vertex order in place.
        In practice, this reverses the direction that the path will be drawn.
        """
        self.vertices.reverse()

    def vertex_count(self):
        ''' Number of vertices in the path '''
        return len(self.vertices)

    def length(self):
        """
        Return total path length; the sum of segment lengths for the path object.
        """
        total_length = 0
        for vertex, next_vertex in zip(self.vertices, self.vertices[1:]):
            total_length += plot_utils.distance(next_vertex[0] - vertex[0],
                                                next_vertex[1] - vertex[1])
        return total_length

    def closed(self):
        """
        If the path returns to its starting point, return True
        Tolerance is of CLOSED_TOLERANCE (0.0001) user units
        """
        if len(self.vertices) > 2:
            # points_near compares squared distances
            return plot_utils.points_near(self.vertices[0], self.vertices[-1],
                CLOSED_TOLERANCE * CLOSED_TOLERANCE)
        return False


class LayerItem: # pylint: disable=too-few-public-methods
    """
    LayerItem: An object corresponding to a single SVG layer

    Each LayerItem instance contains the following elements:
    - name, a string representing the name of the layer
    - paths, a list of PathItem elements in the layer, in plot order
    - item_id: A unique ID string
    """

    def __init__(self):
        self.name = ""                  # Name of the layer
        self.paths = []                 # List of PathItem objects in the layer
        self.item_id = None             # ID string

    @classmethod
    def from_attrs(cls, **kwargs):
        ''' Populate class from attribute keywords '''
        layer_item = cls()
        layer_item.name = kwargs.pop("name", "")
        layer_item.paths = kwargs.pop("paths", [])
        layer_item.item_id = kwargs.pop("item_id", None)
        return layer_item

    def vertex_count(self):
        ''' Total number of vertices over all paths in the layer '''
        return sum(path.vertex_count() for path in self.paths)

    def label(self):
        ''' Layer label used when writing a plob '''
        if self.name:
            return self.name
        return f"layer_{self.item_id}"


class DocDigest:
    """
    DocDigest: An object corresponding to a single SVG document, supporting
    a limited subset of SVG.

    Each DocDigest instance contains the following elements:
    - name: a string representing the file name or path; may be empty
    - width: a number representing the document width
    - height: a number representing the document height
    - units: the unit string of width and height, e.g. "mm"
    - viewbox: a string representing the SVG viewbox of the document
    - metadata: A dict for additional metadata items
    - layers: a list of LayerItem elements in the document
    """

    def __init__(self):
        self.name = ""        # Optional file name or path
        self.width = 0        # Document width, numeric
        self.height = 0       # Document height, numeric
        self.units = "px"     # Units of width and height
        self.viewbox = ""     # SVG viewbox string
        self.metadata = {}    # Dict for additional metadata items
        self.layers = []      # List of LayerItem objects in the document

    def path_count(self):
        ''' Total number of paths over all layers '''
        return sum(len(layer.paths) for layer in self.layers)

    def vertex_count(self):
        ''' Total number of vertices over all layers '''
        return sum(layer.vertex_count() for layer in self.layers)

    def to_plob(self):
        """
        Convert the contents of the DocDigest object into an lxml etree "Plob"
        and return it.

        The Plob (Plot Object) format is a valid but highly-restricted subset
        of SVG. Only layers are allowed in the SVG root. Only polylines are
        allowed in layers. Layer order and path order within each layer
        are written exactly as they stand in the digest.

        Paths with fewer than two vertices cannot be written as polylines,
        and are omitted.
        """

        plob = etree.fromstring(PLOB_BASE)

        if self.width:
            plob.set('width', f"{self.width:f}{self.units}")
        if self.height:
            plob.set('height', f"{self.height:f}{self.units}")
        if self.viewbox:
            plob.set('viewBox', str(self.viewbox))
        plob.set(inkex.addNS('docname', 'sodipodi'), self.name)

        plob_metadata = etree.SubElement(plob, 'metadata')
        for key, value in self.metadata.items():
            plob_metadata.set(key, str(value))

        for layer in self.layers:
            new_layer = etree.SubElement(plob, 'g') # Create new layer in root of plob
            new_layer.set(inkex.addNS('groupmode', 'inkscape'), 'layer')
            new_layer.set(inkex.addNS('label', 'inkscape'), layer.label())
            if layer.item_id:
                new_layer.set('id', layer.item_id)

            for path in layer.paths: # path is a PathItem object.
                poly_string = path.to_string()
                if poly_string:
                    polyline_node = etree.SubElement(new_layer, 'polyline')
                    if path.item_id:
                        polyline_node.set('id', path.item_id)
                    if path.stroke is not None:
                        polyline_node.set('stroke', str(path.stroke))
                    polyline_node.set('points', poly_string)
        return plob

    def from_plob(self, plob):
        """
        Import data from an input "Plob" SVG etree object, and use it to
        populate the contents of this DocDigest object. Clobber any
        existing contents of the DocDigest object.

        Root-level groups are read as layers. Polylines and lines found
        directly in the document root are gathered into a layer named
        __digest-root__, placed ahead of the other layers.
        Any other element type is ignored.
        """

        self.name = ""
        self.width = 0
        self.height = 0
        self.units = "px"
        self.viewbox = ""
        self.metadata = {}
        self.layers = []

        docname = plob.get(inkex.addNS('docname', 'sodipodi'))
        if docname:
            self.name = docname

        for dimension in ('width', 'height'):
            length_string = plob.get(dimension)
            if length_string:
                value, units = plot_utils.parseLengthWithUnits(length_string)
                if value is not None:
                    setattr(self, dimension, value)
                    self.units = units

        vb_temp = plob.get('viewBox')
        if vb_temp:
            self.viewbox = vb_temp

        root_layer = LayerItem.from_attrs(name=ROOT_LAYER_NAME)

        for node in plob:
            if not isinstance(node.tag, str):
                continue # Comments and processing instructions
            if node.tag in ['g', inkex.addNS('g', 'svg')]:
                layer = LayerItem() # New LayerItem object
                layer.item_id = node.get('id')
                layer.name = node.get(inkex.addNS('label', 'inkscape')) or ""
                for subnode in node:
                    path = node_to_path(subnode)
                    if path is not None:
                        layer.paths.append(path)
                self.layers.append(layer)
            elif node.tag in ['metadata', inkex.addNS('metadata', 'svg')]:
                self.metadata = dict(node.attrib)
            else:
                path = node_to_path(node)
                if path is not None:
                    root_layer.paths.append(path)

        if root_layer.paths:
            self.layers.insert(0, root_layer)


def node_to_path(node):
    """
    Return a PathItem for a polyline or line element, else None.
    """
    if node.tag in ['polyline', inkex.addNS('polyline', 'svg')]:
        path = PathItem() # New PathItem object
        path.from_string(node.get('points'))
    elif node.tag in ['line', inkex.addNS('line', 'svg')]:
        try:
            path = PathItem([
                (float(node.get('x1', 0)), float(node.get('y1', 0))),
                (float(node.get('x2', 0)), float(node.get('y2', 0)))])
        except ValueError:
            path = PathItem() # Malformed line; keep it as a degenerate path
    else:
        return None
    path.item_id = node.get('id')
    path.stroke = node.get('stroke')
    return path


def vertex_list_to_string(vertex_list):
    """
    Given a list of 2-element vertices defining XY coordinates, return a string
    that can be used as the "points" attribute within an SVG polyline.

    Input: list of points, e.g., [(1, 2), (3, 4), (5, 6)]
    Output: string, e.g., "1.000000,2.000000 3.000000,4.000000 5.000000,6.000000"

    Return None in the case of nonexistent, improperly formatted, or
    too short (< 2 points) input list.
    """

    if not vertex_list:
        return None

    if len(vertex_list) < 2:
        return None

    try:
        # String conversion: Use default fixed-point precision, 6-digits
        return " ".join(f"{vertex[0]:f},{vertex[1]:f}" for vertex in vertex_list)
    except (IndexError, TypeError, ValueError):
        return None


def polyline_string_to_list(polyline_string):
    """
    Given the "points" attribute string from an SVG polyline,
    return a list of Point objects that can be iterated over easily

    Input: string, e.g., "1,2 3,4 5,6"
    Output: list of points, e.g., [Point(1.0, 2.0), Point(3.0, 4.0), Point(5.0, 6.0)]

    Return None if the string cannot be parsed.
    """

    if not polyline_string:
        return None

    try:
        return [Point(*(float(z) for z in y)) for y in \
            (x.split(',') for x in polyline_string.split())]
    except (TypeError, ValueError):
        return None
