"""Attention Index HTTP API."""
