"""
Sliding-tile puzzle simulator: board, move engine, actions and tile supply.
"""
