"""Trip Capture - saisie terrain GPS + Trip ID / field GPS check-in capture."""
