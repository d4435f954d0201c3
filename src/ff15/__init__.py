"""
ff15 - Interactive File Finder

Searches a directory tree for files whose name contains a search term and
reveals the chosen file in the host file manager.
"""

__version__ = "0.1.0"
__author__ = "ff15 Team"
