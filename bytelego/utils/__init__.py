"""Small helpers shared by the hooks."""
