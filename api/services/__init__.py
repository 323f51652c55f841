"""Services offered under an entity."""
