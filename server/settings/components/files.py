"""Settings for the files app."""

from server.settings.components import config

# Largest single upload accepted by the write path (25 MiB)
FILES_MAX_UPLOAD_BYTES = config(
    'FILES_MAX_UPLOAD_BYTES',
    cast=int,
    default=25 * 1024 * 1024,
)
