"""
API package - versioned REST routers.
"""
