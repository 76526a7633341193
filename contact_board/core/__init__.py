"""Configuration, request middleware and form validation shared by both forms."""
