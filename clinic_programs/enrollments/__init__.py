"""Enrollment Engine: links clients to programs with a status lifecycle."""
