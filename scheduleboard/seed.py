"""
Default catalog and time grid, plus demo data for local development.

seed_defaults only fills empty tables, so it is safe to run on every startup.
"""

import logging

from sqlalchemy.orm import Session

from .domain.assignments.reconciler import WriteReconciler
from .domain.assignments.schemas import AssignmentDraft
from .domain.catalog.repository import ActivityKindRepository
from .domain.roster.repository import ProfessionalRepository
from .domain.timegrid.repository import TimeSlotRepository
from .storage import SqlAlchemyStorage

logger = logging.getLogger(__name__)

DEFAULT_ACTIVITY_KINDS = [
    {"code": "aula", "name": "Aula", "color": "#3b82f6"},
    {"code": "reuniao", "name": "Reunião", "color": "#8b5cf6"},
    {"code": "plantao", "name": "Plantão", "color": "#eab308"},
    {"code": "estudo", "name": "Estudo", "color": "#f59e0b"},
    {"code": "evento", "name": "Evento", "color": "#ef4444"},
    {"code": "ferias", "name": "Férias", "color": "#06b6d4"},
    {"code": "licenca", "name": "Licença", "color": "#64748b"},
    {"code": "disponivel", "name": "Disponível", "color": "#6b7280"},
]


def _half_hours(start_hour: int, end_hour: int) -> list[tuple[str, str]]:
    marks = [f"{h:02d}:{m:02d}" for h in range(start_hour, end_hour) for m in (0, 30)]
    marks.append(f"{end_hour:02d}:00")
    return list(zip(marks, marks[1:]))


# 30-minute building blocks, morning and afternoon with a lunch gap
DEFAULT_TIME_SLOTS = _half_hours(8, 12) + _half_hours(13, 18)

DEMO_CUSTOM_SLOTS = [("08:00", "09:30"), ("09:45", "11:15"), ("13:30", "15:00"), ("15:15", "16:45")]

DEMO_PROFESSIONALS = [
    {"name": "Prof. Paulo", "initials": "PP"},
    {"name": "Profa. Ana Maria", "initials": "AM"},
    {"name": "Prof. Carlos", "initials": "CL"},
    {"name": "Prof. João", "initials": "JM"},
    {"name": "Profa. Maria", "initials": "MM"},
]

# (professional index, weekday, start, end, activity, location, notes)
DEMO_ASSIGNMENTS = [
    (0, "segunda", "08:00", "09:30", "aula", "Sala 101", "Matemática"),
    (1, "segunda", "08:00", "09:30", "aula", "Sala 203", "Português"),
    (3, "segunda", "08:00", "09:30", "estudo", "Biblioteca", "Preparação de aulas"),
    (4, "segunda", "08:00", "09:30", "plantao", "Sala Professores", "Plantão de dúvidas"),
    (0, "segunda", "09:45", "11:15", "reuniao", "Sala Reuniões", "Reunião pedagógica"),
    (1, "segunda", "09:45", "11:15", "aula", "Sala 203", "Português"),
    (2, "segunda", "09:45", "11:15", "reuniao", "Sala Reuniões", "Reunião pedagógica"),
    (3, "segunda", "09:45", "11:15", "aula", "Lab Química", "Química"),
    (0, "segunda", "13:30", "15:00", "aula", "Sala 101", "Matemática"),
    (1, "segunda", "13:30", "15:00", "licenca", None, "Licença médica"),
    (2, "segunda", "13:30", "15:00", "aula", "Sala 201", "História"),
    (3, "segunda", "13:30", "15:00", "estudo", "Biblioteca", "Preparação de provas"),
    (4, "segunda", "13:30", "15:00", "aula", "Sala 205", "Inglês"),
    (0, "terca", "08:00", "09:30", "aula", "Sala 102", "Matemática"),
    (1, "terca", "08:00", "09:30", "reuniao", "Sala Coordenação", "Reunião de departamento"),
    (2, "terca", "08:00", "09:30", "plantao", "Biblioteca", "Plantão de dúvidas"),
    (0, "quarta", "13:30", "15:00", "evento", "Auditório", "Feira de ciências"),
    (1, "quarta", "13:30", "15:00", "plantao", "Sala 208", "Plantão de dúvidas"),
    (3, "quarta", "13:30", "15:00", "evento", "Auditório", "Feira de ciências"),
]


def seed_defaults(db: Session) -> dict:
    """Insert the default activity kinds and base time slots into empty tables"""
    created = {"activity_kinds": 0, "time_slots": 0}

    if not ActivityKindRepository.get_kinds(db):
        logger.info("🌱 Initializing default activity kinds")
        for kind in DEFAULT_ACTIVITY_KINDS:
            ActivityKindRepository.create_kind(db, **kind)
            created["activity_kinds"] += 1

    if not TimeSlotRepository.get_slots(db):
        logger.info("🌱 Initializing default time slots")
        for start, end in DEFAULT_TIME_SLOTS:
            TimeSlotRepository.create_slot(db, start_time=start, end_time=end, interval=30, is_base_slot=True)
            created["time_slots"] += 1

    return created


def seed_demo_data(db: Session) -> dict:
    """Add demo professionals, 90-minute custom slots and sample assignments"""
    seed_defaults(db)

    for start, end in DEMO_CUSTOM_SLOTS:
        if not TimeSlotRepository.get_slot_by_range(db, start, end):
            TimeSlotRepository.create_slot(db, start_time=start, end_time=end, interval=90, is_base_slot=False)

    professionals = ProfessionalRepository.get_professionals(db)
    if not professionals:
        professionals = [ProfessionalRepository.create_professional(db, **p) for p in DEMO_PROFESSIONALS]

    reconciler = WriteReconciler(SqlAlchemyStorage(db))
    written = 0
    for index, weekday, start, end, activity, location, notes in DEMO_ASSIGNMENTS:
        if index >= len(professionals):
            continue
        reconciler.upsert(
            AssignmentDraft(
                professionalId=professionals[index].id,
                weekday=weekday,
                startTime=start,
                endTime=end,
                activity=activity,
                location=location,
                notes=notes,
            )
        )
        written += 1

    return {"professionals": len(professionals), "assignments": written}
