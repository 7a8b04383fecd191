"""Current county risk widget backend."""
