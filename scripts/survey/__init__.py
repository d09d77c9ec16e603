"""Survey intake and answer summary."""
