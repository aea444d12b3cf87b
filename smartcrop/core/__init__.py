"""Configuration, exceptions and data models."""
