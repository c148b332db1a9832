"""ARENA-COMMANDER HTTP application."""
