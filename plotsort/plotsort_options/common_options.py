import argparse

from ink_extensions import inkex

def core_options(config):
    ''' options that set how a document is reordered; defaults are taken from `config`,
    a dict of configured values such as the contents of plotsort_conf '''
    options = argparse.ArgumentParser(add_help = False) # parent parser

    options.add_argument("--reordering",\
                        type=int, action="store", dest="reordering",\
                        default=config["reordering"],\
                        help="SVG reordering option (0-2)."\
                        + " 0: None: Strictly preserve file order."\
                        + " 1: Basic: Reorder paths for speed."\
                        + " 2: Full: Also allow path reversal.")

    options.add_argument("--report_stats",\
                        type=inkex.boolean_option, action="store", dest="report_stats",\
                        default=config["report_stats"],\
                        help="Report path counts and pen-up travel distance")

    options.add_argument("--progress",\
                        type=inkex.boolean_option, action="store", dest="progress",\
                        default=config["progress"],\
                        help="Show a progress bar while reordering")

    options.add_argument("--suppress_warnings",\
                        type=inkex.boolean_option, action="store", dest="suppress_warnings",\
                        default=config["suppress_warnings"],\
                        help="Do not report notes about unusual paths")

    return options
