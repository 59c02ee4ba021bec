"""Domain layer: entities, value objects, rules and repository contracts."""
