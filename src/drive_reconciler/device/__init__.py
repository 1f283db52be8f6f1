"""Device path resolution and drive validation."""
