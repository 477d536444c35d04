"""Command-line interface for wikilinks."""
