"""Command line interface for bandvocoder."""
