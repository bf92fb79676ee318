"""
utils/ - Shared Helpers
=======================
Logging setup and value conversions used across layers.
"""
