"""Client Registry: patient records, listing and search."""
