"""Upstream AI adapters and request orchestration."""
