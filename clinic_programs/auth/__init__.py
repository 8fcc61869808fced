"""
Authentication module for the clinic programs system.

This module provides authentication and authorization functionality including:
- User registration with a best-effort confirmation email
- Login with JWT bearer tokens
- Role-based access control checked against the stored role
"""
