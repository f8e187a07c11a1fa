"""
fieldkit - Dynamic custom-field construction, merge and extraction
"""

__version__ = "0.1.0"
