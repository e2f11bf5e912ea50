"""smartfield command-line interface."""
