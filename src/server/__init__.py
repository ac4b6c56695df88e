"""HTTP API for project context storage and validation."""
