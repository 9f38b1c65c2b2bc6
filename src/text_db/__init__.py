"""
Text DB - Embedded Plain-Text Table Store

A single-file table store that keeps tables as human-readable text regions,
with projection/filter/sort queries and a snapshot-based transaction.
"""

__version__ = "0.1.0"
__author__ = "Systems Engineering Portfolio"
