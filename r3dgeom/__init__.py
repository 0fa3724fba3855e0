"""Mesh types, cylinder, cone and terrain generators, scene import, materials and baked skeletal animation."""

__version__ = "0.1.0"