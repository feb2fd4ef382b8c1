"""
Pydantic schemas for data validation and serialization.

Schemas:
    resource: Resource, note and filter schemas (inputs and domain outputs)
    api: API envelopes (paging, health, save state, errors)

Usage:
    from schemas.resource import ResourceCreate, ResourceFilter, ResourceResponse
    from schemas.api import ResourcePage, ErrorResponse

Example:
    data = ResourceCreate(
        organization="Mission Food Hub",
        category="Food",
        zipcode="94103"
    )
    assert data.status == ResourceStatus.AVAILABLE

Validation:
    Services convert pydantic validation errors into
    core.exceptions.ValidationFailure before touching the store.
"""

__all__ = [
    "ContactDetails",
    "ResourceCreate",
    "ResourceUpdate",
    "NoteCreate",
    "ResourceFilter",
    "NoteResponse",
    "ResourceResponse",
    "ResourcePage",
    "HealthCheckResponse",
    "SaveStatusResponse",
    "ErrorResponse",
]
