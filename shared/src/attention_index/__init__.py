"""Attention Index core: AI adapters, request queue and mock trading."""
