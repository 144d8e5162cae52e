"""Core: pure domain rules and the error hierarchy. No IO, no framework imports."""
