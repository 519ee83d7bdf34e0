"""Core server components: configuration, persistence, services and the canvas engine."""
