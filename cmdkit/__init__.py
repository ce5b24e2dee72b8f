"""
cmdkit - Helper toolkit for command-line automation
"""

__version__ = "0.1.0"
