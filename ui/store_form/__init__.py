"""
Store registration wizard screens.
"""
