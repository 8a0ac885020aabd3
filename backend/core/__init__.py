"""Core backend infrastructure for the student API.

This package contains configuration, logging, database, dependency and entity
scanning helpers used by the FastAPI application factory and the bootstrap
entry point.
"""
