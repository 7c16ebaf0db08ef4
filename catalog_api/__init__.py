"""Product catalog REST API backed by MongoDB."""
