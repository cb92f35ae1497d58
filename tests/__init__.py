"""
Tests Package.

This package contains test suites for wgraph_core, including unit tests for
the ordered containers, the weighted graph storage and its text and YAML
formats, and the graph algorithms built on top of them.
"""

# Tests Package
