"""Django storage configuration for S3-compatible backends.

This module configures django-storages to work with:
- MinIO for local development
- Cloudflare R2 for production (``AWS_S3_REGION_NAME=auto``)

Both are S3-compatible and use the same S3Storage backend. Timeouts and
retries for blob reads live on the boto3 client configured here.
"""

from typing import Any, Final

from botocore.config import Config

from server.settings.components import config

# Storage configuration dictionary
# Uses S3-compatible storage for tenant files, local storage for static files
STORAGES: Final[dict[str, dict[str, Any]]] = {
    'default': {
        'BACKEND': 'server.apps.files.infrastructure.storage.FileStorage',
        'OPTIONS': {
            'bucket_name': config(
                'AWS_STORAGE_BUCKET_NAME',
                default='marble-files',
            ),
            'access_key': config('AWS_ACCESS_KEY_ID', default='minioadmin'),
            'secret_key': config(
                'AWS_SECRET_ACCESS_KEY',
                default='minioadmin',
            ),
            'endpoint_url': config(
                'AWS_S3_ENDPOINT_URL',
                default=None,
            ),
            'region_name': config(
                'AWS_S3_REGION_NAME',
                default='us-east-1',
            ),
            'file_overwrite': False,  # Prevent accidental overwrites
            'default_acl': None,  # Inherit bucket ACL
            'client_config': Config(
                connect_timeout=config(
                    'AWS_S3_CONNECT_TIMEOUT',
                    cast=int,
                    default=5,
                ),
                read_timeout=config(
                    'AWS_S3_READ_TIMEOUT',
                    cast=int,
                    default=30,
                ),
                retries={
                    'max_attempts': config(
                        'AWS_S3_MAX_ATTEMPTS',
                        cast=int,
                        default=3,
                    ),
                    'mode': 'standard',
                },
            ),
        },
    },
    'staticfiles': {
        # Keep static files separate from tenant files
        'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
    },
}
