"""Shared types, configuration, and constants for hyprscale."""
