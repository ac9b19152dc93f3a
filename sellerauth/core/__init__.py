"""Cross-cutting application core: configuration, logging, errors and HTTP wiring."""
