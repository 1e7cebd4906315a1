"""Errors raised by the identity and persistence clients."""

from __future__ import annotations


class FitTrackServiceError(RuntimeError):
    """Base class for failures reported by the hosted backend."""


class AuthenticationError(FitTrackServiceError):
    """Sign-up, sign-in or sign-out was refused."""


class PersistenceError(FitTrackServiceError):
    """A profile, goal or session request failed."""
