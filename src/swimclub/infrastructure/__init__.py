"""Infrastructure layer - External dependencies and implementations.

This layer contains all external dependencies including:
- Database adapters (SQLAlchemy)
- API routes (FastAPI)
- Authentication (JWT, Argon2)
- Email delivery (SMTP, console)

The infrastructure layer implements interfaces defined in the domain layer.
"""
