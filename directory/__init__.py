"""
Resource directory core: queries, mutations and the saved-set.

Modules:
    repository: Repository capability (select/insert/update/delete/count)
                and its SQLAlchemy implementation
    validation: Input coercion raising ValidationFailure
    queries: Filtered, paginated listings and single-resource lookup
    mutations: Create resource, update details, add note
    saved: Per-viewer save/unsave/list

Usage:
    from directory.repository import SQLAlchemyRepository
    from directory.queries import ResourceQueryService

Example:
    repository = SQLAlchemyRepository(session)
    page = await ResourceQueryService(repository).list_resources(
        {"category": "Food", "zipcode": "94103"}, page=1
    )
    print(page.total_resources)

Error Handling:
    Services raise only core.exceptions types: ValidationFailure, NotFound,
    PermissionDenied and QueryFailure.
"""

__all__ = [
    "Repository",
    "SQLAlchemyRepository",
    "ResourceQueryService",
    "ResourceMutationService",
    "SavedResourceService",
]
