"""Default adapters for the sectionlinks ports."""
