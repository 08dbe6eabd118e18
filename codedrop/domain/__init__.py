"""Domain layer: file records, access policy, events and errors."""
