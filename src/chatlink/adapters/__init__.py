"""Concrete collaborators for the core ports (directories, scheduling, rendering)."""
