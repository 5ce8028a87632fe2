"""Terminal stages that render pipeline output."""
