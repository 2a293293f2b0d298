"""Persistence layer: tables, mappers and repositories."""
