"""Configuration - settings and shared constants."""
