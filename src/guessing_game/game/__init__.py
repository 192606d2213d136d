"""Core game: the single-round engine and its message templates."""
