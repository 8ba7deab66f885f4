"""GitHub webhook service."""
