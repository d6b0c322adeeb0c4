"""Command line interface for uilens."""
