"""
Watchpost Server - Version
"""

VERSION = "1.0.0"
