"""Departure rendering."""
