"""
Utilities Package

Common utility functions and helpers.

Contents:
=========
- security: Password hashing and JWT management

Usage:
======
    from audio_vault.shared.utils.security import SecurityUtils
"""

from audio_vault.shared.utils.security import SecurityUtils

__all__ = [
    "SecurityUtils",
]
