"""Infrastructure layer: HTTP transports and resilience."""
