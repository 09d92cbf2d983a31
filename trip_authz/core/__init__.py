"""Core layer: configuration, results, shared errors and the container."""
