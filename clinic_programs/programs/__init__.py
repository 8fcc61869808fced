"""Program Catalog: clinical program definitions."""
