"""Persistence-only repositories."""

from __future__ import annotations

from .user import UserRepository

__all__ = ["UserRepository"]
