"""Core staghorn library: merge engine, languages, layers and configuration."""
