'''
plotsort - Command Line Interface (CLI) for plotsort.

For quick help:
    plotsort --help

This script reorders the polylines in each layer of a plob (polyline SVG)
file, so that a pen plotter spends less time travelling with the pen up.
It accepts various options and provides a facility for setting default values.

'''

import argparse
import sys

from plotsort import __version__
from plotsortcli import utils

from plotink.plot_utils_import import from_dependency_import # plotink
exit_status = from_dependency_import("ink_extensions_utils.exit_status")

cli_version = "plotsort Command Line Interface 1.0.0"

quick_help = '''
    Basic syntax to reorder a file:   plotsort svg_in [OPTIONS]

    For a quick list of options, use: plotsort --help

    To display current version, use:  plotsort --version
        '''

def plotsort_CLI(dev = False):
    ''' The core of the plotsort CLI '''

    desc = 'plotsort Command Line Interface.'

    parser = argparse.ArgumentParser(description=desc, usage=quick_help)

    parser.add_argument("svg_in", nargs='?', \
            help="The SVG file to be reordered")

    parser.add_argument("-f", "--config", type=str, dest="config",
                        help="Filename for the custom configuration file.")

    parser.add_argument("-G","--reordering", \
            metavar='VALUE', type=int, \
            help="SVG reordering option (0-2)."\
            + " 0: None; Strictly preserve file order."\
            + " 1: Basic; Reorder paths for speed."\
            + " 2: Full; Also allow path reversal.")

    parser.add_argument("-T","--report_stats", \
            action="store_const", const=True, \
            help="Report path counts and pen-up travel distance")

    parser.add_argument("-b","--progress", \
            action="store_const",  const=True, \
            help='Enable CLI progress bar while reordering')

    parser.add_argument("-Q","--suppress_warnings", \
            action="store_const",  const=True, \
            help='Do not report notes about unusual paths')

    parser.add_argument("-o","--output_file",\
            metavar='FILE', \
            help="Optional SVG output file name. Default: standard output")

    parser.add_argument("--version",
            action='store_const', const='True',
            help="Output the version of plotsort")

    args = parser.parse_args()

    from plotsort import reorder_control

    info_mode = "version" if args.version else args.svg_in
    utils.handle_info_cases(info_mode, quick_help,
        f"{cli_version}\nplotsort Software {__version__}")

    utils.check_for_input(args.svg_in,
        """usage: plotsort svg_in [OPTIONS]
    Input file required but not found.
    For help, use: plotsort --help""")

    config_dict = utils.load_configs([args.config, 'plotsort.plotsort_conf'])
    combined_config = argparse.Namespace(**config_dict)

    rc = reorder_control.ReorderControl(params = combined_config)

    # Command line options override the merged configuration
    utils.assign_option_values(rc.options, args, config_dict)

    rc.plot_status.cli_api = True # Set flag that this is being called from the CLI.

    try:
        rc.setup(args.svg_in)
    except RuntimeError:
        sys.exit(1) # No need to be more verbose; we have already printed error messages.

    exit_status.run(rc.effect)    # Reorder the document
    utils.output_result(args.output_file, rc.get_output())

    return rc if dev else None # returning rc is useful for tests
