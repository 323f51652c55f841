"""Editing and deleting the authenticated user."""
