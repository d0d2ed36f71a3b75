"""
Global constants used throughout the project
"""

# Accepted MSER candidates between two intermediate pruning passes
PRUNE_AFTER_N_MINIMA = 1000

DEBUG = False
