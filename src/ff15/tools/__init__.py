"""
Search tools and utilities for ff15.

This module contains the components used by the interactive loop: name
matching, filesystem walking, the progress spinner and file manager integration.
"""
