"""Pathfinder client state synchronization.

Keeps per-screen state in step with the Pathfinder GraphQL backend: load,
mutate, update locally, confirm remotely, refresh.
"""

__version__ = "0.1.0"
