"""
Domain-agnostic helpers: union-find, tree traversals and rendering.
"""
