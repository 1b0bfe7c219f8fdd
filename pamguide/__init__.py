"""
PAMGuide - calibrated sound levels from passive acoustic recordings.
"""

__version__ = "1.0.0"
