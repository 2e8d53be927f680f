"""Core logic for infant vitals monitoring.

This package contains the telemetry decoder, age-based reference ranges and
the status classifier, isolated from UI and transport concerns for easy
testing and reasoning.
"""
