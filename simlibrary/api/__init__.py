"""REST API: FastAPI app, engine manager and route modules."""
