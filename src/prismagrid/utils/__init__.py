"""
Utilities - Helpers shared across the application.
"""
