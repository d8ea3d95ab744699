"""Services wrapping third-party collaborators."""
