"""Appy Link HTTP API."""
