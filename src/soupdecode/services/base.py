"""BaseService — shared foundation for soupdecode services."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from soupdecode.services.result import ServiceResult

if TYPE_CHECKING:
    from soupdecode.config.settings import DecodeSettings

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Every service receives the resolved :class:`DecodeSettings` at
    construction time and reads parser/decode options from it.
    """

    def __init__(self, settings: DecodeSettings) -> None:
        self._settings = settings

    @staticmethod
    def _fail(op: str, code: str, message: str, **detail: object) -> ServiceResult:
        """Build a failed ServiceResult and log it at DEBUG."""
        logger.debug("%s failed: %s (%s)", op, code, message)
        return ServiceResult.failure(op, code, message, **detail)
