"""
locimages - aggregate images of a location from several image providers.
"""

__version__ = "1.0.0"
