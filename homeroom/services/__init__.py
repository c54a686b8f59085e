"""Stores and the access policy behind the API routes."""
