"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import (
    AdopterRegisterSchema,
    BreederDocumentsSchema,
    BreederRegisterSchema,
    CheckEmailSchema,
    CheckNicknameSchema,
    LoginSchema,
    RefreshSchema,
    SocialCheckUserSchema,
    SocialCompleteSchema,
    TokenResponseSchema,
)

__all__ = [
    "AdopterRegisterSchema",
    "BreederDocumentsSchema",
    "BreederRegisterSchema",
    "CheckEmailSchema",
    "CheckNicknameSchema",
    "LoginSchema",
    "RefreshSchema",
    "SocialCheckUserSchema",
    "SocialCompleteSchema",
    "TokenResponseSchema",
]
