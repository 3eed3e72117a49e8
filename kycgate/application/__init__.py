"""Application layer: use cases, DTOs and service wiring."""
