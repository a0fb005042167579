"""Domain layer: repository contracts."""
