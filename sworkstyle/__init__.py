"""
sworkstyle

Workspace names with application icons for Sway and i3.
"""

__version__ = "1.3.0"
