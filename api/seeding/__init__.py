"""
Sample data loading. Only ever run through `songmarket seed`.
"""
