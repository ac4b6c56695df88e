"""Shared utilities for project_context."""
