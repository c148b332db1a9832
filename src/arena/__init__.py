"""Arena Commander -- strategic posture controller for the lane-defense opponent."""

__version__ = "0.1.0"
