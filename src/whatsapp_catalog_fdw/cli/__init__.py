"""Command line interface for the catalog foreign data wrapper."""
