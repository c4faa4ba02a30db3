"""Endpoint modules for the sensor service API."""
