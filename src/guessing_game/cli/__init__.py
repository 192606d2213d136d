"""Command line interface for :mod:`guessing_game`."""
