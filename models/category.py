# models/category.py
from pydantic import BaseModel
from typing import Optional, Union

from config import DEFAULT_IMAGE_URL

REGISTRY_TABLE = "Catégories"
REGISTRY_HEADERS = ["IDCategorie", "NomCategorie", "SheetID", "ScriptURL", "ImageURL", "Numero"]

class Category(BaseModel):
    IDCategorie: str
    NomCategorie: str = ""
    SheetID: str = ""
    ScriptURL: str = ""
    ImageURL: str = DEFAULT_IMAGE_URL
    Numero: Optional[Union[str, int]] = ""

class CategoryRef(BaseModel):
    IDCategorie: str

PLACEHOLDER_CATEGORIES = [
    ["CAT-001", "Développement Backend", "REMPLIR_ID_FEUILLE_BACKEND", "REMPLIR_URL_SCRIPT_BACKEND", DEFAULT_IMAGE_URL, "+221771234567"],
    ["CAT-002", "DevOps & Cloud", "REMPLIR_ID_FEUILLE_DEVOPS", "REMPLIR_URL_SCRIPT_DEVOPS", DEFAULT_IMAGE_URL, "+221771234567"],
    ["CAT-003", "Data Science & IA", "REMPLIR_ID_FEUILLE_DATA", "REMPLIR_URL_SCRIPT_DATA", DEFAULT_IMAGE_URL, "+221771234567"],
]
