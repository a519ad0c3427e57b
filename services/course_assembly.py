# services/course_assembly.py
"""Assembles the nested course sheets of one category.

Each category owns five tables (courses, modules, chapters, chapter quizzes,
module quizzes). They are read once per request, indexed by foreign key, and
joined into one document per course:

    course -> modules (by Ordre_Module) -> chapitres (by Ordre_Chapitre) -> quiz
                                        -> quiz

Nothing is written back; the sheets are rebuilt on every call.
"""
import asyncio
import logging
import math
from collections import defaultdict
from typing import Any, Dict, List, Optional

from models.course import (
    COURSES, MODULES, CHAPTERS, CHAPTER_QUIZZES, MODULE_QUIZZES, TABLE_KINDS, table_name,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def key_of(value) -> Optional[str]:
    """Foreign keys compare as trimmed strings so that 1 and "1" join."""
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value).strip()
    return text or None


def order_of(row: Dict[str, Any], column: str) -> float:
    # Missing or non-numeric orders go last
    try:
        value = float(row.get(column))
    except (TypeError, ValueError):
        return math.inf
    return math.inf if math.isnan(value) else value


def index_by(rows: List[Dict[str, Any]], column: str) -> Dict[str, List[Dict[str, Any]]]:
    index = defaultdict(list)
    for row in rows:
        key = key_of(row.get(column))
        if key is not None:
            index[key].append(row)
    return index


async def load_category_tables(store, category: str) -> Dict[str, List[Dict[str, Any]]]:
    names = [table_name(kind, category) for kind in TABLE_KINDS]
    results = await asyncio.gather(*(store.read_table(name) for name in names))
    return dict(zip(TABLE_KINDS, (rows or [] for rows in results)))


class CourseAssembler:
    def __init__(self, tables: Dict[str, List[Dict[str, Any]]]):
        self.courses = tables.get(COURSES) or []
        self.modules_by_course = index_by(tables.get(MODULES) or [], "ID_Cours")
        self.chapters_by_module = index_by(tables.get(CHAPTERS) or [], "ID_Module")
        self.quiz_by_chapter = index_by(tables.get(CHAPTER_QUIZZES) or [], "ID_Chapitre")
        self.quiz_by_module = index_by(tables.get(MODULE_QUIZZES) or [], "ID_Module")
        self.course_by_id = {}
        for course in self.courses:
            course_id = key_of(course.get("ID_Cours"))
            if course_id is not None:
                self.course_by_id.setdefault(course_id, course)

    def modules_for(self, course_id: str) -> List[Dict[str, Any]]:
        rows = self.modules_by_course.get(course_id, [])
        return sorted(rows, key=lambda m: order_of(m, "Ordre_Module"))

    def chapters_for(self, module_id: str) -> List[Dict[str, Any]]:
        rows = self.chapters_by_module.get(module_id, [])
        return sorted(rows, key=lambda c: order_of(c, "Ordre_Chapitre"))

    def assemble_course(self, course_id) -> Optional[Dict[str, Any]]:
        course_id = key_of(course_id)
        base = self.course_by_id.get(course_id) if course_id else None
        if base is None:
            logger.warning(f"Course {course_id} not found, skipped")
            return None

        modules = []
        for module_row in self.modules_for(course_id):
            module_id = key_of(module_row.get("ID_Module"))
            chapters = []
            for chapter_row in self.chapters_for(module_id):
                chapter_id = key_of(chapter_row.get("ID_Chapitre"))
                chapters.append({
                    **chapter_row,
                    "quiz": [dict(q) for q in self.quiz_by_chapter.get(chapter_id, [])],
                })
            modules.append({
                **module_row,
                "chapitres": chapters,
                "quiz": [dict(q) for q in self.quiz_by_module.get(module_id, [])],
            })

        sheet = {**base, "modules": modules}
        logger.info(f"Course sheet {sheet.get('Nom_Cours')} ({course_id}): {len(modules)} modules")
        return sheet

    def assemble_all(self) -> List[Dict[str, Any]]:
        sheets = (self.assemble_course(course.get("ID_Cours")) for course in self.courses)
        return [sheet for sheet in sheets if sheet is not None]


async def assemble_category(store, category: str) -> List[Dict[str, Any]]:
    tables = await load_category_tables(store, category)
    logger.info(
        f"Assembling {category}: {len(tables[COURSES])} courses, "
        f"{len(tables[MODULES])} modules, {len(tables[CHAPTERS])} chapters"
    )
    return CourseAssembler(tables).assemble_all()
