"""Infrastructure Layer: database session management and logging setup."""
