from pawpong.models.adopter import Adopter
from pawpong.models.breeder import Breeder
from pawpong.models.enums import (
    AccountStatus,
    AuthProvider,
    BreederLevel,
    DocumentType,
    PetType,
    Role,
    VerificationPlan,
    VerificationStatus,
)

__all__ = [
    "AccountStatus",
    "Adopter",
    "AuthProvider",
    "Breeder",
    "BreederLevel",
    "DocumentType",
    "PetType",
    "Role",
    "VerificationPlan",
    "VerificationStatus",
]
