"""Service layer public API.

This package exposes the building blocks of the service layer so that
callers can import from :mod:`pawpong.services` without knowing the internal
structure.

Re-exports
----------
- Base primitives (from ``pawpong.services._shared.base``)
    * :class:`BaseService`

- Session lifecycle (from ``pawpong.services.auth``)
    * :class:`AuthService`
    * DTOs: :class:`LoginIn`, :class:`RefreshIn`, :class:`LogoutIn`,
      :class:`AuthResult`

- Social sign-up (from ``pawpong.services.social``)
    * :class:`SocialAuthService`
    * DTOs: :class:`SocialRegistrationIn`, :class:`SocialLoginResult`,
      :class:`SocialUserCheckOut`

- Local sign-up (from ``pawpong.services.registration``)
    * :class:`RegistrationService`
    * DTOs: :class:`AdopterRegistrationIn`, :class:`BreederRegistrationIn`

- Breeder verification (from ``pawpong.services.verification``)
    * :class:`BreederVerificationService`
    * DTOs: :class:`BreederDocumentsIn`, :class:`DocumentSubmissionOut`
"""

from __future__ import annotations

# Base primitives (service base + request-scoped context)
from ._shared.base import BaseService

# Session lifecycle
from .auth.dto import AuthResult, LoginIn, LogoutIn, RefreshIn
from .auth.service import AuthService

# Local sign-up
from .registration.dto import AdopterRegistrationIn, BreederRegistrationIn
from .registration.service import RegistrationService

# Social sign-up
from .social.dto import SocialLoginResult, SocialRegistrationIn, SocialUserCheckOut
from .social.service import SocialAuthService

# Breeder verification
from .verification.dto import BreederDocumentsIn, DocumentSubmissionOut
from .verification.service import BreederVerificationService

__all__ = [
    "AdopterRegistrationIn",
    "AuthResult",
    "AuthService",
    "BaseService",
    "BreederDocumentsIn",
    "BreederRegistrationIn",
    "BreederVerificationService",
    "DocumentSubmissionOut",
    "LoginIn",
    "LogoutIn",
    "RefreshIn",
    "RegistrationService",
    "SocialAuthService",
    "SocialLoginResult",
    "SocialRegistrationIn",
    "SocialUserCheckOut",
]
