from .plotsort_cli import plotsort_CLI

def main():
    plotsort_CLI()

if __name__ == '__main__':
    main()
