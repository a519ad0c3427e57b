# models/account.py
from pydantic import BaseModel
from typing import Any, Optional

USERS_TABLE = "Utilisateurs"
USER_HEADERS = ["IDClient", "Nom", "Email", "PasswordHash", "Telephone", "Adresse",
                "Date d'inscription", "Statut", "Role", "ImageURL", "Titre", "Bio"]
SENSITIVE_COLUMNS = {"PasswordHash"}

class AccountCreate(BaseModel):
    nom: str
    email: str
    motDePasse: str
    role: str = "Client"
    telephone: str = ""
    adresse: str = ""

class LoginRequest(BaseModel):
    email: str
    motDePasse: str

class ProfileUpdate(BaseModel):
    userId: Optional[str] = None
    bio: Optional[str] = None
    titre: Optional[str] = None
    imageUrl: Optional[str] = None

class ClientEvent(BaseModel):
    timestamp: Optional[Any] = None
    type: str = "INFO"
    message: Optional[str] = None
    url: Optional[str] = None
    error: Optional[Any] = None
    payload: Optional[Any] = None
