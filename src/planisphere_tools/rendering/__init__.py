"""Optional renderers for projected chart data."""
