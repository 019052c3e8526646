"""Assessment session lifecycle rules."""
