"""Shared service-layer primitives: base class, DTOs, errors and ports."""
