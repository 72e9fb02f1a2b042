"""Domain helpers: field validators and plain record types."""
