"""Authentication-related Marshmallow schemas.

Request bodies use camelCase keys; ``data_key`` maps them to the snake_case
names the service DTOs expect.
"""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

ROLES = ("adopter", "breeder")
PROVIDERS = ("google", "naver", "kakao")
PLANS = ("basic", "pro")
LEVELS = ("new", "elite")
PET_TYPES = ("cat", "dog")


class BaseSchema(Schema):
    """Ignore unknown keys so clients can send extra form fields."""

    class Meta:
        unknown = EXCLUDE


class LoginSchema(BaseSchema):
    """Input payload for local login."""

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))


class RefreshSchema(BaseSchema):
    """Input payload for token refresh."""

    refresh_token = fields.String(
        required=True, data_key="refreshToken", validate=validate.Length(min=1)
    )


class AdopterRegisterSchema(BaseSchema):
    """Input payload for local adopter sign-up."""

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=6, max=128))
    name = fields.String(required=True, validate=validate.Length(min=1, max=100))
    nickname = fields.String(required=True, validate=validate.Length(min=1, max=50))
    phone = fields.String(load_default=None, validate=validate.Length(max=30))
    profile_image = fields.String(
        load_default=None, data_key="profileImage", validate=validate.Length(max=500)
    )
    marketing_agreed = fields.Boolean(load_default=False, data_key="marketingAgreed")


class BreederRegisterSchema(BaseSchema):
    """Input payload for local breeder sign-up."""

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=6, max=128))
    name = fields.String(required=True, validate=validate.Length(min=1, max=100))
    phone = fields.String(load_default=None, validate=validate.Length(max=30))
    breeder_name = fields.String(
        load_default=None, data_key="breederName", validate=validate.Length(max=100)
    )
    introduction = fields.String(load_default=None)
    city = fields.String(load_default=None, validate=validate.Length(max=50))
    district = fields.String(load_default=None, validate=validate.Length(max=50))
    pet_type = fields.String(
        load_default=None, data_key="petType", validate=validate.OneOf(PET_TYPES)
    )
    breeds = fields.List(fields.String(), load_default=list, validate=validate.Length(max=5))
    plan = fields.String(load_default=None, validate=validate.OneOf(PLANS))
    level = fields.String(
        load_default=None, data_key="breederLevel", validate=validate.OneOf(LEVELS)
    )
    profile_image = fields.String(load_default=None, data_key="profileImage")
    marketing_agreed = fields.Boolean(load_default=False, data_key="agreeMarketing")


class CheckEmailSchema(BaseSchema):
    email = fields.String(required=True, validate=validate.Length(min=1, max=254))


class CheckNicknameSchema(BaseSchema):
    nickname = fields.String(required=True, validate=validate.Length(min=1, max=50))


class SocialCheckUserSchema(BaseSchema):
    """Input payload for the social identity existence check."""

    provider = fields.String(required=True, validate=validate.OneOf(PROVIDERS))
    provider_id = fields.String(
        required=True, data_key="providerId", validate=validate.Length(min=1)
    )
    email = fields.String(load_default=None)


class SocialCompleteSchema(BaseSchema):
    """
    Input payload completing a social sign-up.

    Role-specific requirements (nickname, breeder business fields) are
    enforced by the service so each missing field gets its own message.
    """

    temp_id = fields.String(load_default=None, data_key="tempId")
    registration_token = fields.String(load_default=None, data_key="registrationToken")
    role = fields.String(required=True, validate=validate.OneOf(ROLES))
    email = fields.Email(load_default=None, validate=validate.Length(max=254))
    name = fields.String(load_default=None, validate=validate.Length(max=100))
    nickname = fields.String(load_default=None, validate=validate.Length(max=50))
    phone = fields.String(load_default=None, validate=validate.Length(max=30))
    profile_image = fields.String(load_default=None, data_key="profileImage")
    marketing_agreed = fields.Boolean(load_default=False, data_key="marketingAgreed")
    breeder_name = fields.String(load_default=None, data_key="breederName")
    introduction = fields.String(load_default=None)
    city = fields.String(load_default=None)
    district = fields.String(load_default=None)
    pet_type = fields.String(
        load_default=None, data_key="petType", validate=validate.OneOf(PET_TYPES)
    )
    breeds = fields.List(fields.String(), load_default=list)
    plan = fields.String(load_default=None, validate=validate.OneOf(PLANS))
    level = fields.String(load_default=None, validate=validate.OneOf(LEVELS))


class BreederDocumentsSchema(BaseSchema):
    """Input payload for breeder verification-document submission."""

    level = fields.String(
        required=True, data_key="breederLevel", validate=validate.OneOf(LEVELS)
    )
    id_card_url = fields.String(load_default=None, data_key="idCardUrl")
    animal_production_license_url = fields.String(
        load_default=None, data_key="animalProductionLicenseUrl"
    )
    adoption_contract_sample_url = fields.String(
        load_default=None, data_key="adoptionContractSampleUrl"
    )
    recent_association_document_url = fields.String(
        load_default=None, data_key="recentAssociationDocumentUrl"
    )
    breeder_certification_url = fields.String(
        load_default=None, data_key="breederCertificationUrl"
    )
    tica_cfa_document_url = fields.String(load_default=None, data_key="ticaCfaDocumentUrl")


class TokenResponseSchema(Schema):
    """Response payload of the refresh endpoint."""

    access_token = fields.String(required=True, data_key="accessToken")
    refresh_token = fields.String(required=True, data_key="refreshToken")
    access_token_expires_in = fields.Integer(required=True, data_key="accessTokenExpiresIn")
    refresh_token_expires_in = fields.Integer(required=True, data_key="refreshTokenExpiresIn")
