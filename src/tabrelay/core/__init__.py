"""Navigation strategies and process execution."""
