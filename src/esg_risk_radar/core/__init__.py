"""Shared data model, severity scales and time helpers.

Modules:
- models: immutable pydantic models for all engine inputs and outputs
- severity: severity enums, the single ranking convention, score bucketing
- timeutil: ISO-8601 timestamp helpers
"""
