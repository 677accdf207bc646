"""
dbsetup - Interactive PostgreSQL provisioning wizard
"""

__version__ = "0.1.0"

from .core import DatabaseSetup, SetupError

__all__ = ["DatabaseSetup", "SetupError"]
