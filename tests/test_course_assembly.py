import pytest

from models.course import COURSES, MODULES, CHAPTERS, CHAPTER_QUIZZES, MODULE_QUIZZES, table_name
from services.course_assembly import CourseAssembler, assemble_category, key_of, order_of


def backend_tables():
    return {
        COURSES: [{"ID_Cours": "C-001", "Nom_Cours": "Microservices", "Prix": 75000}],
        MODULES: [
            {"ID_Cours": "C-001", "ID_Module": "M-2", "Nom_Module": "Communication", "Ordre_Module": 2},
            {"ID_Cours": "C-001", "ID_Module": "M-1", "Nom_Module": "Fondations", "Ordre_Module": 1},
        ],
        CHAPTERS: [
            {"ID_Module": "M-1", "ID_Chapitre": "CH-2", "Nom_Chapitre": "Monolithe distribué", "Ordre_Chapitre": 2},
            {"ID_Module": "M-1", "ID_Chapitre": "CH-1", "Nom_Chapitre": "Introduction", "Ordre_Chapitre": 1},
        ],
        CHAPTER_QUIZZES: [{"ID_Chapitre": "CH-2", "Question": "Couplage ?", "Bonne_Réponse": "Temporel"}],
        MODULE_QUIZZES: [],
    }


@pytest.mark.asyncio
async def test_backend_category_scenario(store):
    for kind, rows in backend_tables().items():
        for row in rows:
            await store.append_row(table_name(kind, "Backend"), row)

    sheets = await assemble_category(store, "Backend")

    assert len(sheets) == 1
    modules = sheets[0]["modules"]
    assert [m["ID_Module"] for m in modules] == ["M-1", "M-2"]
    assert len(modules[0]["chapitres"]) == 2
    assert modules[0]["chapitres"][0]["ID_Chapitre"] == "CH-1"
    assert len(modules[0]["chapitres"][1]["quiz"]) == 1
    assert modules[1]["chapitres"] == []
    assert modules[1]["quiz"] == []


@pytest.mark.asyncio
async def test_missing_tables_give_empty_category(store):
    assert await assemble_category(store, "Inconnue") == []


def test_courses_do_not_share_modules():
    tables = {
        COURSES: [{"ID_Cours": "A"}, {"ID_Cours": "B"}],
        MODULES: [
            {"ID_Cours": "A", "ID_Module": "MA", "Ordre_Module": 1},
            {"ID_Cours": "B", "ID_Module": "MB", "Ordre_Module": 1},
        ],
        CHAPTERS: [
            {"ID_Module": "MA", "ID_Chapitre": "CA", "Ordre_Chapitre": 1},
            {"ID_Module": "MB", "ID_Chapitre": "CB", "Ordre_Chapitre": 1},
        ],
    }
    sheets = CourseAssembler(tables).assemble_all()

    assert [s["ID_Cours"] for s in sheets] == ["A", "B"]
    assert [m["ID_Module"] for m in sheets[0]["modules"]] == ["MA"]
    assert [c["ID_Chapitre"] for c in sheets[1]["modules"][0]["chapitres"]] == ["CB"]


def test_course_without_modules_has_empty_list():
    sheets = CourseAssembler({COURSES: [{"ID_Cours": "C-9"}]}).assemble_all()
    assert sheets == [{"ID_Cours": "C-9", "modules": []}]


def test_module_order_is_numeric_and_stable_with_invalid_last():
    tables = {
        COURSES: [{"ID_Cours": "C"}],
        MODULES: [
            {"ID_Cours": "C", "ID_Module": "bad", "Ordre_Module": "abc"},
            {"ID_Cours": "C", "ID_Module": "ten", "Ordre_Module": 10},
            {"ID_Cours": "C", "ID_Module": "two-a", "Ordre_Module": "2"},
            {"ID_Cours": "C", "ID_Module": "missing"},
            {"ID_Cours": "C", "ID_Module": "two-b", "Ordre_Module": 2},
            {"ID_Cours": "C", "ID_Module": "one", "Ordre_Module": 1},
        ],
    }
    modules = CourseAssembler(tables).assemble_all()[0]["modules"]
    assert [m["ID_Module"] for m in modules] == ["one", "two-a", "two-b", "ten", "bad", "missing"]


def test_foreign_keys_match_across_types():
    tables = {
        COURSES: [{"ID_Cours": 1}],
        MODULES: [{"ID_Cours": "1", "ID_Module": 7.0, "Ordre_Module": 1}],
        MODULE_QUIZZES: [{"ID_Module": "7", "Question": "Q"}],
    }
    module = CourseAssembler(tables).assemble_all()[0]["modules"][0]
    assert module["quiz"] == [{"ID_Module": "7", "Question": "Q"}]


def test_unknown_course_is_skipped():
    assembler = CourseAssembler({COURSES: [{"ID_Cours": "C-1"}, {"Nom_Cours": "Sans identifiant"}]})
    assert assembler.assemble_course("C-404") is None
    assert [s["ID_Cours"] for s in assembler.assemble_all()] == ["C-1"]


def test_assembly_does_not_mutate_rows_and_is_repeatable():
    tables = backend_tables()
    first = CourseAssembler(tables).assemble_all()
    second = CourseAssembler(tables).assemble_all()

    assert first == second
    assert "chapitres" not in tables[MODULES][0]
    assert "quiz" not in tables[CHAPTERS][0]


def test_key_and_order_helpers():
    assert key_of(" C-1 ") == "C-1"
    assert key_of(3.0) == "3"
    assert key_of("") is None
    assert order_of({"o": "4"}, "o") == 4
    assert order_of({"o": float("nan")}, "o") == float("inf")
