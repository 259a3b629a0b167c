"""Application DTOs: typed records exchanged between use cases and repositories."""
