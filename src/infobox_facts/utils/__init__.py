# ABOUTME: Cross-cutting utilities and shared infrastructure
# ABOUTME: Supporting services: logging configuration and rich console tables

"""
Utils Layer: Shared infrastructure and cross-cutting concerns

This layer provides:
- Logging configuration and structured loggers
- Rich tables for command output

Data Flow: Supporting services for all other layers
"""

from . import logging

__all__ = [
    "logging",
]
