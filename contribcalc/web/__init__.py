"""Shared FastAPI plumbing."""
