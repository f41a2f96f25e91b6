"""Document writers."""
