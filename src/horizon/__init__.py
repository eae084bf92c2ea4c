"""Horizon - a local to-do list organized by contexts and time horizons."""
