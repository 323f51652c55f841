"""Entities: income and expense sources owned by a user."""
