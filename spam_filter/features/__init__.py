"""
Text preprocessing and feature extraction utilities.

This subpackage includes:
- text normalization (lowercasing, accent stripping, whitespace cleanup)
- word and character n-gram featurizers for the subject and message columns.
"""
