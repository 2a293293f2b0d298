"""Core configuration, logging and request dependencies."""
