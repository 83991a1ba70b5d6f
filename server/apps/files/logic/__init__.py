"""Business logic layer for files app.

This package contains all business logic for files and folders:
- Access decisions (visibility for reads, ownership for writes)
- Tenant-scoped metadata lookups
- File retrieval and upload
- Folder listing and trash (soft delete)

All business logic should be implemented here, separate from
models (data layer), infrastructure (external systems) and views.
"""
