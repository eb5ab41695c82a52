"""Fornecedor API - supplier management with JWT-backed registration and login."""

__version__ = "1.0.0"
