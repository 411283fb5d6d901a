"""User Management API backend."""
