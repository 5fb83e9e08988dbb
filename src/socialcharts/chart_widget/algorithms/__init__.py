"""Algorithms used by chart figure generation.

Pure pandas/numpy implementations with no plotly dependency; the group
summary (five-number summary + IQR per group) feeds the box plot.
"""
