"""Visualization module for wall networks.

This module provides functionality to generate images of a wall network
after it has been split.
"""

from .generator import generate_network_image

__all__ = ["generate_network_image"]
