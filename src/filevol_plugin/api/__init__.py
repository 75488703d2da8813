"""Docker volume plugin protocol endpoints."""
