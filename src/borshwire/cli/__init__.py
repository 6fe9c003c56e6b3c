"""Command-line interface for borshwire."""
