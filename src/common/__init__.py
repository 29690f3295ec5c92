"""Common utilities for the trip pricing services."""
