"""Pydantic models shared by the server layer."""
