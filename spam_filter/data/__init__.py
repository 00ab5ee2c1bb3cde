"""
Data loading and dataset utilities.

This subpackage provides:
- functions to load the labeled email CSV and derive spam labels
- seeded train/test splitting.
"""
