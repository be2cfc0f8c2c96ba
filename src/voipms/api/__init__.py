"""
VoIP.ms API package.

Keep package import side-effects to a minimum to avoid circular imports.
Do not import client/transport here.
"""

__all__ = [
    "wire",
    "encoder",
    "requests",
    "models",
    "transport",
    "client",
    "errors",
]
