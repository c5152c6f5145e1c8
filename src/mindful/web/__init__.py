"""Mindful web app."""
