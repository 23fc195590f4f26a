"""Command-line interface for sourcedump."""
