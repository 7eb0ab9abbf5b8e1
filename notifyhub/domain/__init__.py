"""Domain layer: entities, errors and collaborator contracts."""
