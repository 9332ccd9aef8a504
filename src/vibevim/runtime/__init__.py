"""Telemetry and configuration shared across the engine."""
