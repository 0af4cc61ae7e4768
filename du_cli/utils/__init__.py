"""Small helpers for du-cli."""
