"""Shared utilities for Sobre."""

from sobre.utils.logger import get_logger

__all__ = ["get_logger"]
