from .plotsort_cli import plotsort_CLI
