"""
Typed client for the VoIP.ms REST API.

Keep package import side-effects to a minimum: the CLI and the API client
are imported from their own modules.
"""

__all__ = [
    "api",
    "config",
    "cli",
]

__version__ = "0.1.0"
