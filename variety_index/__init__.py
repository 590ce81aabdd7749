"""variety_index package initializer.

This package computes Related, Unrelated and Total Variety indexes for
each (year, region) pair of a cleaned employment panel.  Modules cover
input validation, taxonomy resolution, share calculation, the entropy
engine and output assembly.  See individual module docstrings for
details.
"""
