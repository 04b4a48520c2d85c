"""Console client exercising the Cognito authentication flows."""

__version__ = "0.1.0"
