# authgate/services/_shared/base.py
from __future__ import annotations

import logging

from authgate.core import errors as api_errors
from authgate.services._shared.errors import InvalidGrantError


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide a module-scoped logger.
    * Centralize error translation.
    * Keep services thin, orchestration-only, no web leakage.
    """

    def __init__(self) -> None:
        self.log = logging.getLogger(type(self).__module__)

    # -------------------------- Error handling ------------------------------

    def translate_exceptions(self, exc: Exception) -> Exception:
        """
        Map service-level errors to API-level (HTTP) errors.

        Every grant failure surfaces as ``400 invalid_request``; anything else
        is returned untouched and bubbles up to the Flask handlers.

        :param exc: Exception raised within the service.
        :returns: Translated exception ready to be re-raised.
        """
        if isinstance(exc, InvalidGrantError):
            return api_errors.InvalidRequest(str(exc))
        return exc
