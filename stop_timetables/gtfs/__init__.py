"""GTFS feed models, reading and validation."""
