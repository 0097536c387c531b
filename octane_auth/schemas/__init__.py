"""Pydantic schemas for octane-auth results."""

from .tokens import TokenPair

__all__ = ["TokenPair"]
