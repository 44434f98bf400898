"""
HTTP API

Serves the analyzer, AI helper and save handlers over FastAPI.
Run with: python scripts/serve.py
"""
