"""Domain layer: value objects, entities, errors and the storage services."""
