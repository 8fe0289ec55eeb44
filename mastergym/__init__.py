"""MasterGym training core: workout sessions, training plans and image storage upkeep."""

__version__ = "0.1.0"
