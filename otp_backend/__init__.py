"""
BACKEND PACKAGE INITIALIZATION FILE

Flask JSON API over otp_core.
"""

from .app import app

__all__ = ['app']
