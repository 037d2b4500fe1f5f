from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..core.constants import DEFAULT_ALLOWED_EMAIL_DOMAIN
from ..core.exceptions import AuthorizationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmailDomainPolicy:
    """Only accounts on the organisation's email domain may use the app.

    This is the one place the rule lives; the request hook, sign-in and
    sign-up all ask this object.
    """

    allowed_domain: str = DEFAULT_ALLOWED_EMAIL_DOMAIN

    @property
    def suffix(self) -> str:
        return "@" + self.allowed_domain.lstrip("@").lower()

    def is_allowed(self, email: Optional[str]) -> bool:
        if not email:
            return False
        return email.strip().lower().endswith(self.suffix)

    def ensure_allowed(self, email: Optional[str]) -> None:
        if not self.is_allowed(email):
            logger.warning("Rejected email outside %s: %r", self.suffix, email)
            raise AuthorizationError(f"Only {self.suffix} accounts can use this app")
