"""Chat command dispatcher."""
