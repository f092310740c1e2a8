"""Scale, viewport and layout calculations for the timeline."""
