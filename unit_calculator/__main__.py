"""Entrypoint that runs against any filenames provided on the command line."""

from . import run

if __name__ == "__main__":
    run()
