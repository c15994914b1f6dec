"""Lens social-graph domain model."""

from __future__ import annotations

from .social import Comment, Post, Profile

__all__ = ["Comment", "Post", "Profile"]
