"""
Cache-aware client for guild REST endpoints.
"""
