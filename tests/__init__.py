"""
Tests package for the CodeDrop backend.

This package contains test suites organized by type:
- unit/: Fast tests of single components
- property/: Property-based tests using Hypothesis
- e2e/: End-to-end workflow tests through the HTTP API
"""
