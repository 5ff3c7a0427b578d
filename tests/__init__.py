"""
Tests Package.

This package contains test suites for the commuter graph visualizer, including
unit tests for topology generation, packet simulation and interaction, and
tests for the renderer, the UI shells and the command line interface.
"""

# Tests Package
