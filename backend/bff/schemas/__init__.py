"""Pydantic Schemas — upstream payloads and client-facing response shapes.

Invariants:
    - Upstream payloads modeled explicitly; optional fields are nullable, never Any
    - Client-facing names live only in response models (ownerWalletAddress, propertyType, ...)

Design Decisions:
    - Upstream models ignore unknown fields: the upstreams evolve independently
    - Field names mirror the wire (camelCase) so model_dump() is the response body
"""
