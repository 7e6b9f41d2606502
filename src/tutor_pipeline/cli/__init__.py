"""Command-line entry points for the build pipeline."""
