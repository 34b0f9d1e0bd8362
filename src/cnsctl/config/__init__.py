"""Configuration — settings, config discovery, logging setup."""
