"""
Top-level package for the random forest email spam filter.

This package contains modules for:
- data loading, label derivation and splitting
- text normalization and featurization
- the forest pipeline and its run configuration
- the training / evaluation sweep
- metric computation and report rendering
- shared helper functions
"""
