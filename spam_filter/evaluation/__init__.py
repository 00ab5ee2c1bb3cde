"""
Evaluation utilities.

This subpackage offers:
- binary metric computations (accuracy, F1, positive/negative
  precision and recall)
- plain-text rendering of the metrics report.
"""
