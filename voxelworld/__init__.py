"""Core data, physics, world generation and in-memory networking for a voxel game."""

__version__ = "0.1.0"