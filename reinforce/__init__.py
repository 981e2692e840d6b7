"""
Reinforcement learning module for the sliding-tile puzzle.

This module provides an n-tuple network player trained by temporal-difference learning over afterstates:

Submodules
----------
network : n-tuple value function
    - symmetry: dihedral orderings of the 4x4 grid
    - NTupleNetwork: 4 patterns x 8 orderings of weight lookups
    - WeightStore: dense weight tables and their binary file
module : agents
    - Player: one-ply move selection, learns at the end of each episode
    - Environment: places a tile on the edge opposite to the last slide
training : learning
    - TemporalDifferenceLearner: backward TD(0) pass over an episode
    - Trajectory: afterstates and rewards of an episode
train : self-play training script
"""
