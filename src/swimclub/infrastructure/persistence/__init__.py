"""Persistence layer: database session management, models and repositories."""
