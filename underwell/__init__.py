"""
Underwell Pit - a tower-defense simulation around two everstone resonators.
"""

__version__ = "0.1.0"
