"""Infrastructure adapters: stores, settings, logging and wiring."""
