# models/course.py
from pydantic import BaseModel, field_validator
from typing import Any, Dict, Optional

# Table kinds of a category service; the stored table is "<kind>_<category>"
COURSES = "Cours"
MODULES = "Modules"
CHAPTERS = "Chapitres"
CHAPTER_QUIZZES = "Quiz_Chapitres"
MODULE_QUIZZES = "Quiz_Modules"
TABLE_KINDS = (COURSES, MODULES, CHAPTERS, CHAPTER_QUIZZES, MODULE_QUIZZES)

TABLE_HEADERS = {
    COURSES: ["ID_Cours", "Nom_Cours", "Résumé", "Durée_Totale", "Niveau", "Prix", "URL_Vidéo",
              "Image_Couverture", "Freemium_Start", "Freemium_End", "Objectifs", "Prérequis",
              "Avantage_Senior", "Public_Cible", "Formateur_Nom", "Formateur_Titre", "Formateur_Bio",
              "Note_Moyenne", "Avis"],
    MODULES: ["ID_Cours", "ID_Module", "Nom_Module", "Ordre_Module"],
    CHAPTERS: ["ID_Module", "ID_Chapitre", "Nom_Chapitre", "Durée", "Ressource", "Ordre_Chapitre"],
    CHAPTER_QUIZZES: ["ID_Chapitre", "Question", "Réponse_1", "Réponse_2", "Réponse_3", "Réponse_4", "Bonne_Réponse"],
    MODULE_QUIZZES: ["ID_Module", "Question", "Réponse_1", "Réponse_2", "Réponse_3", "Réponse_4", "Bonne_Réponse"],
}

# Natural key used by saveRow when the caller does not name one
TABLE_KEYS = {
    COURSES: "ID_Cours",
    MODULES: "ID_Module",
    CHAPTERS: "ID_Chapitre",
    CHAPTER_QUIZZES: None,
    MODULE_QUIZZES: None,
}


def table_name(kind: str, category: str) -> str:
    return f"{kind}_{category}"


class SaveRowRequest(BaseModel):
    table: str
    row: Dict[str, Any]
    key: Optional[str] = None

    @field_validator("table")
    @classmethod
    def known_table(cls, value):
        if value not in TABLE_KINDS:
            raise ValueError(f"Table inconnue: {value}")
        return value


DEMO_ROWS = {
    COURSES: [
        ["C-001", "Maîtriser l'architecture microservices : les 10 pièges que seul un CTO connaît",
         "Un cours intensif qui va au-delà des tutoriels basiques pour vous enseigner les stratégies et les erreurs à éviter, tirées de 15 ans d'expérience terrain.",
         "8h 30min", "Intermédiaire vers Expert", 75000, "https://www.youtube.com/embed/dQw4w9WgXcQ",
         "https://i.postimg.cc/pX3dYj8B/course-microservices.jpg", "0", "1200",
         "Maîtriser les patterns de communication; Concevoir des API résilientes; Gérer la consistance des données distribuées.",
         "Bases en développement backend (Node.js, Java, ou autre); Connaissance des API REST.",
         "Apprenez à penser comme un architecte système et non plus comme un simple développeur.",
         "Développeurs Backend avec 3+ ans d'expérience.", "Jean Dupont", "CTO @ TechInnov",
         "Après avoir mené 3 transformations monolithiques vers microservices, j'ai condensé mes plus grandes leçons (et échecs) dans ce cours.",
         "4.8", "125 Avis"],
    ],
    MODULES: [
        ["C-001", "M-001-1", "Fondations et Anti-Patterns", 1],
        ["C-001", "M-001-2", "Communication Inter-Services", 2],
    ],
    CHAPTERS: [
        ["M-001-1", "CH-001-1-1", "Introduction : Pourquoi les microservices échouent (Freemium)", "20min", "PDF: Checklist des prérequis", 1],
        ["M-001-1", "CH-001-1-2", "Le piège du Monolithe Distribué", "45min", "Code: Exemple à ne pas suivre", 2],
        ["M-001-2", "CH-001-2-1", "REST vs gRPC vs Message Queues", "55min", "Quiz d'évaluation", 3],
    ],
    CHAPTER_QUIZZES: [
        ["CH-001-2-1", "Quel est le principal inconvénient d'une communication synchrone (REST) dans un système microservice ?",
         "Couplage temporel fort", "Performance", "Sécurité", "Complexité du code", "Couplage temporel fort"],
    ],
    MODULE_QUIZZES: [],
}


def demo_rows(kind: str):
    headers = TABLE_HEADERS[kind]
    return [dict(zip(headers, values)) for values in DEMO_ROWS[kind]]
