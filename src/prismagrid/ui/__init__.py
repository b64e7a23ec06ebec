"""
UI - PySide6 desktop interface.
"""
