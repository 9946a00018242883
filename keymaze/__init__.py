"""
Key collection maze solver.

Finds the fewest steps needed to collect every key in a grid maze where
gates open only once their matching key is held.
"""

__version__ = "1.0.0"
