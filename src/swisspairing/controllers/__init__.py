"""Controllers operating on the tournament snapshot."""
