from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List, Dict, Any


# --- Vues typées optionnelles sur les réponses Passport ---
# Le client retourne des structures brutes (dict / list) ; ces modèles permettent
# à l'appelant de les valider via response.success_as(...) / response.error_as(...).
# Les champs inconnus sont tolérés : l'API Passport en ajoute au fil des versions.


class PassportModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


# --- Schéma des erreurs ---

class ErrorDetail(PassportModel):
    """Une erreur Passport (générale ou rattachée à un champ)"""
    code: str                   = Field(..., description="Code d'erreur, ex: [NotFound] ou [blank]user.email")
    message: Optional[str]      = Field(None, description="Message lisible")


class Errors(PassportModel):
    """Corps d'erreur standard (400 de validation, 404, ...)"""
    general_errors: List[ErrorDetail]               = Field(default_factory=list, alias="generalErrors")
    field_errors: Dict[str, List[ErrorDetail]]      = Field(default_factory=dict, alias="fieldErrors")

    def codes(self) -> List[str]:
        """Tous les codes d'erreur, généraux puis par champ."""
        out = [error.code for error in self.general_errors]
        for errors in self.field_errors.values():
            out.extend(error.code for error in errors)
        return out


# --- Utilisateurs ---

class UserRegistration(PassportModel):
    application_id: str             = Field(..., alias="applicationId")
    roles: List[str]                = Field(default_factory=list)
    username: Optional[str]         = None
    verified: Optional[bool]        = None


class User(PassportModel):
    """Utilisateur Passport"""
    id: Optional[str]                   = Field(None, description="UUID de l'utilisateur")
    email: Optional[str]                = None
    username: Optional[str]             = None
    first_name: Optional[str]           = Field(None, alias="firstName")
    last_name: Optional[str]            = Field(None, alias="lastName")
    active: Optional[bool]              = None
    verified: Optional[bool]            = None
    registrations: List[UserRegistration] = Field(default_factory=list)
    data: Dict[str, Any]                = Field(default_factory=dict)


class UserResponse(PassportModel):
    user: User


# --- Login / JWT ---

class LoginResponse(PassportModel):
    """Réponse de /api/login"""
    user: Optional[User]                    = Field(None, description="Utilisateur authentifié")
    token: Optional[str]                    = Field(None, description="Access token (JWT)")
    refresh_token: Optional[str]            = Field(None, alias="refreshToken")
    two_factor_id: Optional[str]            = Field(None, alias="twoFactorId")


class RefreshTokenResponse(PassportModel):
    """Réponse de /api/jwt/refresh et /api/jwt/issue"""
    token: str


class ValidateResponse(PassportModel):
    """Réponse de /api/jwt/validate : les claims du JWT"""
    jwt: Dict[str, Any] = Field(default_factory=dict)


# --- Applications ---

class ApplicationRole(PassportModel):
    id: Optional[str]                   = None
    name: str
    description: Optional[str]          = None
    is_default: Optional[bool]          = Field(None, alias="isDefault")
    is_super_role: Optional[bool]       = Field(None, alias="isSuperRole")


class Application(PassportModel):
    id: Optional[str]                   = None
    name: str
    active: Optional[bool]              = None
    roles: List[ApplicationRole]        = Field(default_factory=list)


class ApplicationResponse(PassportModel):
    application: Optional[Application]          = None
    applications: List[Application]             = Field(default_factory=list)
