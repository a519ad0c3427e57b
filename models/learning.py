# models/learning.py
from pydantic import BaseModel
from typing import Any, List, Optional

PURCHASES_TABLE = "Cours_Achetés"
PROGRESS_TABLE = "Progression_Utilisateur"
QUIZ_ANSWERS_TABLE = "Reponses_Quiz"
COMPLETED = "Terminé"

class PurchaseItem(BaseModel):
    productId: str
    name: str = ""
    price: float = 0
    instructor: str = ""

class Purchase(BaseModel):
    userId: str
    items: List[PurchaseItem]

class QuizAnswer(BaseModel):
    userId: str
    questionId: str
    reponseDonnee: Any = None
    estCorrecte: bool = False

class ProgressEntry(BaseModel):
    userId: str
    courseId: str
    elementId: str
    elementType: str = "Chapitre"
    statut: str = COMPLETED
    dateCompletion: Optional[str] = None
