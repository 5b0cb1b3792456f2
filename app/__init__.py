# app/__init__.py
"""
Smart event planner backend: marketing-material generation and event storage.
The FastAPI application lives in ``app.main``.
"""
__all__: list[str] = ["main"]
