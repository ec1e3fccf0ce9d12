"""CRUD helpers for the credential store."""
