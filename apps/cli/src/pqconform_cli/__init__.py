"""Command-line entry point for the pqconform harness."""
