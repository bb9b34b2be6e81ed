"""Command line interface for circuitnet."""
