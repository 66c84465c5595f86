"""Sun, Moon and planets."""
