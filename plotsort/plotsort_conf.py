# plotsort_conf.py
# Part of the plotsort software
#
# Version 1.0.0
#
# Copyright 2023 Windell H. Oskay, Evil Mad Scientist Laboratories
#
# "Change numbers here, not there." :)


'''
Primary user-adjustable control parameters:

We encourage you to freely tune these values as needed to match your
 application and taste.

These parameters are used as defaults when using plotsort with the command-
 line interface (CLI) or with the python library. With the CLI, you can
 make copies of this configuration file and specify a configuration file.

'''

# DEFAULT VALUES

reordering = 1          # Plot optimization option (0-2)
                            # 0: None; Strictly preserve file order
                            # 1: Basic; Reorder paths for speed (Default)
                            # 2: Full; Also allow path reversal

report_stats = False    # Report path counts and pen-up travel before and after reordering

progress = False        # Show a progress bar while reordering (CLI only)

'''
Additional user-adjustable control parameters:

Values below this point are configured only in this file, not through the user interface(s).
'''

suppress_warnings = False  # If True, do not report notes about empty or single-point paths.
