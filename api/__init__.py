"""
api: HTTP routes, dependencies, middleware and error mapping.
"""
