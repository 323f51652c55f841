"""Subscriptions: billing periods linking a payee to a service."""
