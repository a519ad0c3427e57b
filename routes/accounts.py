# routes/accounts.py
from fastapi import APIRouter, Depends
from typing import Optional
import logging
import time

from database import get_store, DuplicateRowError
from models.action import ActionRequest
from models.account import USERS_TABLE, AccountCreate, LoginRequest, ProfileUpdate, ClientEvent
from routes.auth import hash_password, verify_password, public_user, create_access_token, find_user
from routes.common import run_action
from services.app_logger import AppLogger, now_iso, recent_logs
from services.errors import ServiceError

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/accounts", tags=["accounts"])

SOURCE = "BACK-END (COMPTE)"
LOGIN_FAILED = "Email ou mot de passe incorrect."
PROFILE_COLUMNS = {"bio": "Bio", "titre": "Titre", "imageUrl": "ImageURL"}


async def creer_compte_client(store, data):
    account = AccountCreate(**data)
    email = account.email.strip().lower()
    client_id = f"CLT-{int(time.time() * 1000)}"
    try:
        # Email uniqueness is enforced by the unique index on Utilisateurs.Email
        await store.append_row(USERS_TABLE, {
            "IDClient": client_id,
            "Nom": account.nom,
            "Email": email,
            "PasswordHash": hash_password(account.motDePasse),
            "Telephone": account.telephone,
            "Adresse": account.adresse,
            "Date d'inscription": now_iso(),
            "Statut": "Actif",
            "Role": account.role,
            "ImageURL": "",
            "Titre": "",
            "Bio": "",
        })
    except DuplicateRowError:
        raise ServiceError("Un compte avec cet email existe déjà.")
    await AppLogger(store, SOURCE).log_action("creerCompteClient", {"email": email, "id": client_id, "role": account.role})
    return {"success": True, "id": client_id}

async def connecter_client(store, data):
    login = LoginRequest(**data)
    email = login.email.strip().lower()
    user = await find_user(store, "Email", email)
    app_logger = AppLogger(store, SOURCE)
    if not user or not verify_password(login.motDePasse, user.get("PasswordHash")):
        await app_logger.log_action("connecterClient", {"email": email, "success": False})
        raise ServiceError(LOGIN_FAILED)
    await app_logger.log_action("connecterClient", {"email": email, "success": True, "id": user["IDClient"]})
    return {"success": True, "user": public_user(user), "access_token": create_access_token(user)}

async def update_profile(store, data):
    profile = ProfileUpdate(**data)
    if not profile.userId:
        raise ServiceError("ID utilisateur manquant pour la mise à jour.")
    values = {column: getattr(profile, field) for field, column in PROFILE_COLUMNS.items() if getattr(profile, field)}
    if not await find_user(store, "IDClient", profile.userId):
        raise ServiceError("Utilisateur non trouvé.")
    if values:
        await store.update_rows(USERS_TABLE, {"IDClient": profile.userId}, values)
    return {"success": True, "message": "Profil mis à jour."}

async def log_client_event(store, data):
    event = ClientEvent(**data)
    details = {"message": event.message, "url": event.url, "error": event.error, "payload": event.payload}
    timestamp = str(event.timestamp) if event.timestamp is not None else None
    await AppLogger(store, "FRONT-END").log_event(event.type, details, timestamp)
    return {"success": True}

async def get_app_logs(store, params=None):
    return {"success": True, "logs": await recent_logs(store)}


POST_ACTIONS = {
    "creerCompteClient": creer_compte_client,
    "connecterClient": connecter_client,
    "updateProfile": update_profile,
    "logClientEvent": log_client_event,
}

GET_ACTIONS = {
    "getAppLogs": get_app_logs,
}


@router.get("")
async def accounts_get(action: Optional[str] = None, store=Depends(get_store)):
    if not action:
        return {"success": True, "message": "API Gestion Compte - Active"}
    return await run_action(GET_ACTIONS, action, AppLogger(store, SOURCE), store=store)

@router.post("")
async def accounts_post(request: ActionRequest, store=Depends(get_store)):
    logger.info(f"Account action: {request.action}")
    return await run_action(POST_ACTIONS, request.action, AppLogger(store, SOURCE), store=store, data=request.data)
