'''
utils.py - helpers for the plotsort command line interface:
input/output file handling, and merging of configuration files with
command line options.
'''

import errno
import os
import runpy
import sys
import warnings

# Options that may be set both on the command line and in a configuration file
OPTION_NAMES = ['reordering', 'report_stats', 'progress', 'suppress_warnings']

def handle_info_cases(no_flag_arg, quick_help, version_text):
    ''' Print help or version text and exit, if that is what was asked for '''
    if no_flag_arg == "help":
        print(quick_help)
        sys.exit()
    if no_flag_arg == "version":
        print(version_text)
        sys.exit()

def check_for_input(input_file, bad_input_message):
    ''' Exit with an error unless input_file names an existing file '''
    if input_file is None or not os.path.isfile(input_file):
        print(bad_input_message)
        sys.exit(1)

def output_result(output_file, result):
    ''' Write the reordered SVG to output_file, or to stdout if no file is given '''
    if output_file:
        with open(output_file, 'w', encoding='utf-8') as out:
            out.write(result)
    else:
        sys.stdout.write(result)


# CONFIGURATION UTILS

def load_configs(config_list):
    '''
    Merge a list of configurations into a single dict. Each item is a file name,
    a module name, or None; earlier items take priority over later ones.
    '''
    config_dict = {}
    for config in reversed(config_list): # lowest priority first, so later updates win
        config_dict.update(load_config(config))
    return config_dict


def load_config(config):
    '''
    Execute a configuration file (or module) and return its public names as a dict.
    Exit with an error message if the configuration cannot be loaded.
    '''
    if config is None:
        return {}

    try:
        config_dict = runpy.run_path(config)
    except SyntaxError as err:
        print(f'Config file {err.filename} has a syntax error on line {err.lineno}:')
        print(f'    {err.text}')
        sys.exit(1)
    except OSError as err:
        if config.endswith(".py") and err.errno == errno.ENOENT:
            print(f"Could not find the config file {config}.")
            sys.exit(1)
        with warnings.catch_warnings():
            # runpy warns when the module has already been imported
            warnings.simplefilter("ignore", RuntimeWarning)
            try:
                config_dict = runpy.run_module(config)
            except ImportError:
                print(f"Could not find any config file or module named {config}.")
                sys.exit(1)

    return { key: value for key, value in config_dict.items() if not key.startswith("_") }


def assign_option_values(options_obj, command_line, config, option_names=OPTION_NAMES):
    """
    Set each of option_names on options_obj: the command line value if one was
    given, else the value from the merged config dict, else the value already held.
    argparse leaves options missing from the command line as None.
    """
    for name in option_names:
        value = getattr(command_line, name, None)
        if value is None:
            value = config.get(name, getattr(options_obj, name, None))
        setattr(options_obj, name, value)
