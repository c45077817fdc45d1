"""
Configuration management for the Images API.

Contains Pydantic settings and mode-aware defaults that work across
local-dev, aws-mock, and aws-prod deployment modes.
"""
