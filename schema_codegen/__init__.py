"""Generate pydantic models from JSON Schema files."""
