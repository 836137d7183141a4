"""Upstream clients, cache and orchestration."""
