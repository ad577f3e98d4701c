"""Chat command dispatcher sources."""
