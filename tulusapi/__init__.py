"""JSON web API with user registration, login and JWT-protected routes."""

__version__ = "0.1.0"