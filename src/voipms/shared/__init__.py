"""
Shared infrastructure components.
"""
