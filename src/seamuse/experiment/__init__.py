"""Named bot configurations."""
