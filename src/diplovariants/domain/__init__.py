"""Engine-independent domain model for variants and phases."""
