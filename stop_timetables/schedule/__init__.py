"""Stop schedule construction and departure queries."""
