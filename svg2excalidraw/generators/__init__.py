"""Scene traversal and element construction."""
