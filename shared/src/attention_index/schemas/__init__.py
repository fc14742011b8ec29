"""Pydantic schemas shared by the services and the API."""
