"""Cognito custom authentication challenge triggers."""

__version__ = "0.1.0"
