"""
Model definitions for spam detection.

This subpackage contains the run configuration and the
featurize -> normalize -> random forest pipeline builder.
"""
