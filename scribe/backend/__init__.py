"""
Summary Backend.

FastAPI service that proxies editor content to a hosted language model.
Run with: uvicorn scribe.backend.main:app
"""
