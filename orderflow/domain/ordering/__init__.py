"""Ordering domain: the Order aggregate, its lines, events and errors."""
