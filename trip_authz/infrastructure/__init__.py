"""Infrastructure layer: adapters for the database, policy service and logging."""
