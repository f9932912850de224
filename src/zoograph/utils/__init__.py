"""Utility modules for the zoo graph system."""
