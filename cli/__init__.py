"""Command line interface for nnplayground."""
