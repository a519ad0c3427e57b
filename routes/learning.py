# routes/learning.py
from fastapi import APIRouter, Depends
from typing import Optional
import logging
import time

from database import get_store
from models.action import ActionRequest
from models.learning import (
    PURCHASES_TABLE, PROGRESS_TABLE, QUIZ_ANSWERS_TABLE, COMPLETED,
    Purchase, QuizAnswer, ProgressEntry,
)
from routes.common import run_action
from services.app_logger import AppLogger, now_iso
from services.errors import ServiceError

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/learning", tags=["learning"])

SOURCE = "BACK-END (APPRENTISSAGE)"


def millis() -> int:
    return int(time.time() * 1000)


async def acheter_cours(store, data):
    purchase = Purchase(**data)
    if not purchase.items:
        raise ServiceError("Données d'achat invalides.")
    purchased_at = now_iso()
    for item in purchase.items:
        await store.append_row(PURCHASES_TABLE, {
            "ID_Achat": f"ACH-{millis()}-{item.productId[-4:]}",
            "ID_Client": purchase.userId,
            "ID_Cours": item.productId,
            "Nom_Cours": item.name,
            "Prix_Achat": item.price,
            "Formateur_Nom": item.instructor,
            "Date_Achat": purchased_at,
        })
    return {"success": True, "message": f"{len(purchase.items)} cours acheté(s) avec succès."}

async def get_cours_achetes(store, params):
    user_id = params.get("userId")
    if not user_id:
        raise ServiceError("ID utilisateur manquant.")
    rows = await store.read_table(PURCHASES_TABLE)
    course_ids = [row.get("ID_Cours") for row in rows if row.get("ID_Client") == user_id]
    return {"success": True, "data": list(dict.fromkeys(course_ids))}

async def enregistrer_reponse_quiz(store, data):
    answer = QuizAnswer(**data)
    answer_id = f"REP-{millis()}"
    await store.append_row(QUIZ_ANSWERS_TABLE, {
        "ID_Reponse": answer_id,
        "ID_Client": answer.userId,
        "ID_Question": answer.questionId,
        "Reponse_Donnee": answer.reponseDonnee,
        "Est_Correcte": answer.estCorrecte,
        "Timestamp": now_iso(),
    })
    return {"success": True, "id": answer_id}

async def enregistrer_progression(store, data):
    entry = ProgressEntry(**data)
    progress_id = f"PRG-{millis()}"
    await store.append_row(PROGRESS_TABLE, {
        "ID_Progression": progress_id,
        "ID_Client": entry.userId,
        "ID_Cours": entry.courseId,
        "ID_Element": entry.elementId,
        "Type_Element": entry.elementType,
        "Statut": entry.statut,
        "Date_Completion": entry.dateCompletion or now_iso(),
    })
    return {"success": True, "id": progress_id}

async def get_progression_cours(store, params):
    user_id, course_id = params.get("userId"), params.get("courseId")
    if not user_id or not course_id:
        raise ServiceError("ID utilisateur ou ID cours manquant.")
    rows = [
        row for row in await store.read_table(PROGRESS_TABLE)
        if row.get("ID_Client") == user_id and row.get("ID_Cours") == course_id and row.get("Statut") == COMPLETED
    ]
    chapters = list(dict.fromkeys(r.get("ID_Element") for r in rows if r.get("Type_Element") == "Chapitre"))
    modules = list(dict.fromkeys(r.get("ID_Element") for r in rows if r.get("Type_Element") == "Module"))
    return {"success": True, "data": {"completedChapters": chapters, "completedModules": modules}}

async def get_senior_dashboard_data(store, params):
    instructor = params.get("formateurNom")
    if not instructor:
        raise ServiceError("Nom du formateur manquant.")
    sales = [row for row in await store.read_table(PURCHASES_TABLE) if row.get("Formateur_Nom") == instructor]

    revenue = 0.0
    course_sales = {}
    for row in sales:
        try:
            revenue += float(row.get("Prix_Achat") or 0)
        except (TypeError, ValueError):
            logger.warning(f"Non-numeric price on purchase {row.get('ID_Achat')}, not counted")
        course_sales[row.get("ID_Cours")] = course_sales.get(row.get("ID_Cours"), 0) + 1

    return {"success": True, "data": {
        "revenue": revenue,
        "students": len({row.get("ID_Client") for row in sales}),
        "courseSales": course_sales,
    }}


GET_ACTIONS = {
    "getCoursAchetes": get_cours_achetes,
    "getProgressionCours": get_progression_cours,
    "getSeniorDashboardData": get_senior_dashboard_data,
}

POST_ACTIONS = {
    "acheterCours": acheter_cours,
    "enregistrerReponseQuiz": enregistrer_reponse_quiz,
    "enregistrerProgression": enregistrer_progression,
}


@router.get("")
async def learning_get(
    action: Optional[str] = None,
    userId: Optional[str] = None,
    courseId: Optional[str] = None,
    formateurNom: Optional[str] = None,
    store=Depends(get_store),
):
    if not action:
        return {"success": True, "message": "API Gestion Cours - Active"}
    params = {"userId": userId, "courseId": courseId, "formateurNom": formateurNom}
    return await run_action(GET_ACTIONS, action, AppLogger(store, SOURCE), store=store, params=params)

@router.post("")
async def learning_post(request: ActionRequest, store=Depends(get_store)):
    return await run_action(POST_ACTIONS, request.action, AppLogger(store, SOURCE), store=store, data=request.data)
