"""Shared utilities for daogen."""
