"""IP-based attendance marking.

Feature modules (network, registry, attendance, storage) with a thin Flask
controller layer over service and store layers.
"""
from .main import create_app

__all__ = ["create_app"]
