"""Clock, configuration and logging helpers."""
