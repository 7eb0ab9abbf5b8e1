"""Application layer: route registry, resolvers and notification use cases."""
