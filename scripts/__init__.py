"""Command line entry points and sample configs."""
