"""Service layer for the Townhall application."""
