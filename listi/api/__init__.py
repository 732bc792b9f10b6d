"""HTTP layer - FastAPI application, routes and dependency wiring."""
