"""
Core - Palette generation logic independent of the UI.
"""
