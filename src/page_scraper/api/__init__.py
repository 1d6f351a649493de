"""HTTP transport layer: FastAPI application, routes and schemas."""
