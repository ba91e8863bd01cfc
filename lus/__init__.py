"""
Answer evaluation and assessment aggregation for read-aloud comprehension exercises.
"""

__version__ = '1.0.0'
