"""Homeroom: teacher-assigned homework with role-gated access."""

__version__ = "0.1.0"
