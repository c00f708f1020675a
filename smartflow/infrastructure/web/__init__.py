"""
FastAPI adapters: routers, middleware and request dependencies.
"""
