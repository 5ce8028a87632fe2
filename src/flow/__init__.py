"""Concurrent stage runtime: bounded channels and the pipeline runner."""
