"""Cyber Guide recap service."""
