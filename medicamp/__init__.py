"""
MediCamp API: backend for a medical camp registration platform.
"""

__version__ = "1.0.0"
