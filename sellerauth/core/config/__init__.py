"""Configuration package: pydantic-settings mix-ins composed into ``settings``."""
