"""Infrastructure layer for files app.

This package contains integrations with external systems:
- Custom storage backend (S3/MinIO/R2) with content-type aware reads
- Metadata helpers (MIME type, storage keys, response headers)

Keep infrastructure concerns separate from business logic.
"""
