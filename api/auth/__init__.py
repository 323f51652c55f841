"""Bearer-token authentication for protected routes."""
