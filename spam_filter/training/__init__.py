"""
Training pipelines.

This subpackage runs the forest sweep: split, train and evaluate one
forest per configured (leaves, trees) pair.
"""
