"""Domain layer: entities, value objects, repository ports and services."""
