#
# Copyright 2022 Windell H. Oskay, Evil Mad Scientist Laboratories
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
plot_warnings.py

Classes for managing and outputting plotsort text warnings

Part of plotsort, path sequencing for pen plotters

"""

from plotsort.path_objects import ROOT_LAYER_NAME

def layer_name_text(layer_name):
    '''Format layer name text for displaying in warning messages'''
    if layer_name == ROOT_LAYER_NAME:
        return " found in the document root."
    if layer_name.strip() == '':
        return "."
    return " in a layer named " + layer_name.strip() + "."

class PlotWarnings:
    """
    PlotWarnings: Class for managing and outputting warning text messages
    """

    def __init__(self):
        self.warning_dict = {} # Dict for warnings; only store the first warning of each type.
        self.suppress_list = [] # List of warnings that will be suppressed (not reported).

    def reset(self):
        '''Clear the warnings dictionary'''
        self.warning_dict.clear()

    def add_new(self, warning_name, value="1"):
        '''
        Add a warning if that warning type is not already in the dictionary.
        For the "degenerate" and "short" types, the value should reference
        the layer where the path was found.
        '''
        if warning_name not in self.warning_dict:
            self.warning_dict[warning_name] = value

    def suppress(self, warning_name):
        '''
        Disable reporting of a specific warning type.
        Use "__all__" as the warning name argument to suppress *all* warnings.
        '''
        self.suppress_list.append(warning_name)

    def check_digest(self, digest):
        '''Add warnings for any paths in the digest that need special handling'''
        if digest.path_count() == 0:
            self.add_new('empty')
        for layer in digest.layers:
            for path in layer.paths:
                if path.degenerate():
                    self.add_new('degenerate', layer.name)
                elif path.vertex_count() < 2:
                    self.add_new('short', layer.name)

    def return_text_list(self):
        '''Return a list of formatted warning strings'''
        warning_text_list = []

        if '__all__' in self.suppress_list:
            return warning_text_list

        if 'empty' in self.warning_dict:
            if 'empty' not in self.suppress_list:
                warning_text_list.append(
                    "Note (empty): This file does not contain any paths to reorder.\n"
                )

        if 'degenerate' in self.warning_dict:
            if 'degenerate' not in self.suppress_list:
                warning_text_list.append(
                    'Note (degenerate): This file contains paths without any points' +
                    layer_name_text(self.warning_dict['degenerate']) +
                    "\nThese paths have nothing to draw, and are omitted from the output.\n"
                )

        if 'short' in self.warning_dict:
            if 'short' not in self.suppress_list:
                warning_text_list.append(
                    'Note (short): This file contains paths with a single point' +
                    layer_name_text(self.warning_dict['short']) +
                    "\nThese paths were sorted, but cannot be saved as polylines.\n"
                )

        return warning_text_list

    def report(self, suppress, message_fun):
        '''Print warning messages to the given message function'''
        if not suppress:
            for warning_message in self.return_text_list():
                message_fun(warning_message)
