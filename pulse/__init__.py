"""Pulse: event feedback collection with a live feed."""
