"""
PrismaGrid - HSL color grid palette generator.
"""

__version__ = "0.1.0"
