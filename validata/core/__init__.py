# Core module exports
from validata.core.config import Settings, get_settings
from validata.core.errors import AppError, CatalogError, ErrorCode, ErrorContext
from validata.core.logging import (
    configure_logging,
    configure_from_settings,
    get_logger,
    validation_logger,
    i18n_logger,
)
