"""Pydantic models for inbound build events and dashboard value types."""
