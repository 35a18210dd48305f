"""Shared infrastructure: logging, exceptions, paths and configuration."""
