"""Shared types, wire messages and logging setup."""
