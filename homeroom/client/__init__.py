"""Async client for the Homeroom API: login, session persistence, and views."""

from homeroom.client.errors import ApiError, LoginInProgressError
from homeroom.client.session import SessionContext, SessionManager

__all__ = ["ApiError", "LoginInProgressError", "SessionContext", "SessionManager"]
