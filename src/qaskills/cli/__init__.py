"""qaskills command line interface."""
