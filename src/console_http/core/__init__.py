"""Core configuration for console-http."""
