"""Core configuration and path helpers for fsguard."""
