"""
Shared utility functions.

This subpackage includes:
- YAML configuration loading
- seeding and reproducibility helpers
- path management
- lightweight logging helpers used across the project.
"""
