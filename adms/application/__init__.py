"""Application layer: DTOs, the validation framework and conversion services."""
