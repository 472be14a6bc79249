"""Round-generation engine: capacity, history, search, scoring and the session runner."""
