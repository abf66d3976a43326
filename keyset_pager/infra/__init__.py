"""Infrastructure shared by the pagination engine."""
