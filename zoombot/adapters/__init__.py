"""Adapters — Zoom API clients and the FastAPI web surface."""
