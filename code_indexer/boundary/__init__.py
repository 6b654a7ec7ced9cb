"""Boundary adapters for external services (embedding provider, vector store)."""
