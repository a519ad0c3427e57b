# routes/auth.py
from fastapi import APIRouter, HTTPException, Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
import bcrypt
import logging

from config import JWT_SECRET
from database import get_store
from models.account import USERS_TABLE, SENSITIVE_COLUMNS

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/accounts", tags=["auth"])
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/accounts")


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")

def verify_password(password: str, hashed: str) -> bool:
    if not hashed:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), str(hashed).encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is not a bcrypt hash")
        return False

def public_user(row: dict) -> dict:
    return {k: v for k, v in row.items() if k not in SENSITIVE_COLUMNS}

def create_access_token(user: dict) -> str:
    return jwt.encode({"id": user["IDClient"], "role": user.get("Role", "Client")}, JWT_SECRET, algorithm="HS256")

async def find_user(store, column: str, value):
    for row in await store.read_table(USERS_TABLE):
        if row.get(column) == value:
            return row
    return None

async def get_current_user(token: str = Depends(oauth2_scheme), store=Depends(get_store)):
    try:
        payload = jwt.decode(token, JWT_SECRET, algorithms=["HS256"])
    except JWTError as e:
        logger.error(f"JWTError: {str(e)}")
        raise HTTPException(status_code=401, detail="Invalid token")
    user_id = payload.get("id")
    if not user_id:
        logger.error("Invalid token: Missing user id")
        raise HTTPException(status_code=401, detail="Invalid token")
    user = await find_user(store, "IDClient", user_id)
    if not user:
        logger.warning(f"User not found for id: {user_id}")
        raise HTTPException(status_code=401, detail="User not found")
    return public_user(user)

@router.get("/current-user")
async def get_current_user_endpoint(current_user: dict = Depends(get_current_user)):
    return {"success": True, "user": current_user}
