"""Payees attached to an entity and one of its services."""
