"""Transport layer: FastAPI application and command-line interface."""
