"""Prompt builders for the text-generation model."""
