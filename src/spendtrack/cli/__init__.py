"""Command-line interface for spendtrack."""
