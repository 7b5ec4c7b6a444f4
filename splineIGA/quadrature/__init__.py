"""
Numerical integration.
"""

from .simpson import quad_simpson
