# coding=utf-8
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
reorder_control.py

Python API for plotsort: read a plob (polyline SVG) document, reorder the
paths in each of its layers to reduce pen-up travel, and write it back out.

Typical use:

    rc = ReorderControl()
    rc.setup("drawing.svg")
    rc.options.reordering = 2
    output_svg = rc.run(output=True)
"""

import argparse
from importlib import import_module
import logging
import time

from lxml import etree

from plotsort import path_objects
from plotsort import plot_optimizations
from plotsort import plot_status
from plotsort import plot_warnings
from plotsort.plotsort_options import common_options

from plotink.plot_utils_import import from_dependency_import # plotink
message = from_dependency_import('ink_extensions_utils.message')

logger = logging.getLogger(__name__)
package_logger = logging.getLogger('plotsort')


class ReorderControl:
    """ Main class for plotsort """

    logging_attrs = {"default_handler": message.UserMessageHandler()}

    def __init__(self, default_logging=True, user_message_fun=message.emit, params=None):
        if params is None:
            params = import_module("plotsort.plotsort_conf") # Default configuration file
        self.params = params

        self.option_parser = argparse.ArgumentParser(add_help=False,
            parents=[common_options.core_options(params.__dict__)])
        self.options = None
        self.getoptions([])

        self.plot_status = plot_status.PlotStatus()
        self.warnings = plot_warnings.PlotWarnings()
        self.user_message_fun = user_message_fun

        self.document = None    # lxml ElementTree of the input
        self.digest = None      # path_objects.DocDigest of the input
        self.time_elapsed = 0   # Time spent reordering, s

        if default_logging: # logging setup
            package_logger.setLevel(logging.INFO)
            package_logger.addHandler(self.logging_attrs["default_handler"])

    def getoptions(self, argstrings):
        ''' Parse option strings, e.g. ["--reordering", "2"], into self.options '''
        self.options = self.option_parser.parse_args(argstrings)

    def set_debug(self, enable=True):
        ''' Enable or disable debug logging output '''
        package_logger.setLevel(logging.DEBUG if enable else logging.INFO)

    @property
    def status_code(self):
        ''' Nonzero if the last run was stopped by an error '''
        return self.plot_status.stopped

    def setup(self, svg_input):
        """
        Begin reordering context: parse an SVG file, or an SVG string.
        Raise RuntimeError if the input cannot be read.
        """
        self.plot_status.reset()
        self.warnings.reset()
        self.document = None
        self.digest = None

        file_ok = False
        try: # Parse input file
            with open(svg_input, 'rb') as file_ref:
                parse_ref = etree.XMLParser(huge_tree=True)
                self.document = etree.parse(file_ref, parser=parse_ref)
            file_ok = True
        except (OSError, TypeError, ValueError):
            pass # It wasn't a file; was it a string?
        except etree.XMLSyntaxError as err:
            self._stop(plot_status.STATUS_PARSE_ERROR, f"Unable to parse SVG input file: {err}")

        if not file_ok:
            try:
                svg_string = svg_input.encode('utf8') # Need consistent encoding.
                parse_ref = etree.XMLParser(huge_tree=True, encoding='utf8')
                self.document = etree.ElementTree(etree.fromstring(svg_string, parser=parse_ref))
            except (AttributeError, ValueError, etree.XMLSyntaxError):
                if isinstance(svg_input, str) and '<' in svg_input:
                    self._stop(plot_status.STATUS_PARSE_ERROR, "Unable to parse SVG input.")
                else:
                    self._stop(plot_status.STATUS_FILE_ERROR, "Unable to open SVG input file.")

        self.digest = path_objects.DocDigest()
        self.digest.from_plob(self.document.getroot())
        logger.debug("Read %d layers, %d paths", len(self.digest.layers),
            self.digest.path_count())

    def _stop(self, code, text):
        ''' Record why we stopped, log it, and bail out '''
        self.plot_status.stopped = code
        logger.error(text)
        raise RuntimeError(text)

    def effect(self):
        """ Reorder the paths of the document, as selected by self.options """

        if self.digest is None:
            logger.error("No SVG input provided.")
            logger.error("Use setup(svg_input) before effect() or run().")
            raise RuntimeError("No SVG input provided.")

        self.warnings.check_digest(self.digest)
        self.plot_status.stats_before = plot_status.DocStats.from_digest(self.digest)

        start_time = time.time()
        reordering = self.options.reordering
        if reordering in (1, 2):
            progress = self.plot_status.progress
            progress.enable = bool(self.options.progress) and self.plot_status.cli_api
            progress.launch(self.digest.path_count())
            try:
                plot_optimizations.reorder(self.digest, reordering == 2, progress.update)
            finally:
                progress.close()
        elif reordering != 0:
            logger.warning("Unknown reordering option %s; preserving file order.", reordering)
        self.time_elapsed = time.time() - start_time

        self.plot_status.stats_after = plot_status.DocStats.from_digest(self.digest)

        if self.options.report_stats:
            self.plot_status.stats_after.report(self.user_message_fun,
                self.plot_status.stats_before, self.time_elapsed)
        self.warnings.report(self.options.suppress_warnings, self.user_message_fun)

    def get_output(self):
        ''' Return the reordered document as a plob SVG string '''
        if self.digest is None:
            return None
        plob = self.digest.to_plob()
        return etree.tostring(plob, pretty_print=True, xml_declaration=True,
            encoding='UTF-8').decode('utf-8')

    def run(self, output=False):
        ''' Reorder the document; return the resulting SVG string if output is True '''
        self.effect()
        if output:
            return self.get_output()
        return None
