"""
LMS GRADEBOOK - Grade aggregation, GPA and transcript engine

Turns raw per-assignment grade entries into category averages, course final
grades, semester/cumulative GPAs and stored transcript documents.
"""

__version__ = "1.0.0"
