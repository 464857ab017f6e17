"""Performance benchmarks for dfconduit.

This package contains microbenchmarks for hot paths in the library,
including simplex sampling, population updates and full optimizer runs.
"""
