"""Command line interface for daogen."""
