"""Asset schemas and structural validation of generated output."""
