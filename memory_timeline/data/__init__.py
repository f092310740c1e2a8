"""Event model, event sources and timeline statistics."""
