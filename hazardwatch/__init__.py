"""
HazardWatch: live earthquake map with a simulated SOS flow.
"""

__version__ = "0.1.0"
