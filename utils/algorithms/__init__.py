"""
Pure algorithms with no domain-specific dependencies.

Modules:
    tree - Tree traversals
"""
