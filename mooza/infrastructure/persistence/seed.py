"""
Reference catalog seed data.

Upserts the administrator-maintained option lists. Safe to run repeatedly:
existing rows are updated in place, nothing is deleted.
"""

from typing import Dict, List, Optional, Tuple

import structlog

from mooza.database.sqlmodel_engine import SQLModelDatabaseManager
from mooza.domain.entities.facet import FacetId
from mooza.infrastructure.persistence.mappers.catalog_mapper import REFERENCE_TABLES

logger = structlog.get_logger(__name__)

# (id, name, name_en, parent_id)
SeedRow = Tuple[str, str, str, Optional[str]]

FIELDS: List[SeedRow] = [
    ("music-production", "Музыкальное производство", "Music production", None),
    ("performing-arts", "Исполнительское искусство", "Performing arts", None),
    ("sound-engineering", "Звукорежиссура", "Sound engineering", None),
    ("music-management", "Музыкальный менеджмент", "Music management", None),
    ("music-education", "Образование и преподавание", "Education and teaching", None),
]

PROFESSIONS: List[SeedRow] = [
    ("producer", "Продюсер", "Producer", "music-production"),
    ("beatmaker", "Битмейкер", "Beatmaker", "music-production"),
    ("arranger", "Аранжировщик", "Arranger", "music-production"),
    ("composer", "Композитор", "Composer", "music-production"),
    ("sound-designer", "Саунд-дизайнер", "Sound designer", "music-production"),
    ("vocalist", "Вокалист", "Vocalist", "performing-arts"),
    ("guitarist", "Гитарист", "Guitarist", "performing-arts"),
    ("drummer", "Барабанщик", "Drummer", "performing-arts"),
    ("keyboardist", "Клавишник", "Keyboardist", "performing-arts"),
    ("dj", "Диджей", "DJ", "performing-arts"),
    ("sound-engineer", "Звукорежиссёр", "Sound engineer", "sound-engineering"),
    ("mastering-engineer", "Мастеринг-инженер", "Mastering engineer", "sound-engineering"),
    ("mixing-engineer", "Микс-инженер", "Mixing engineer", "sound-engineering"),
    ("live-sound-operator", "Звукооператор", "Live sound operator", "sound-engineering"),
    ("recording-engineer", "Инженер записи", "Recording engineer", "sound-engineering"),
    ("artist-manager", "Музыкальный менеджер", "Artist manager", "music-management"),
    ("tour-director", "Концертный директор", "Tour director", "music-management"),
    ("booking-agent", "Букинг-агент", "Booking agent", "music-management"),
    ("pr-manager", "PR-менеджер", "PR manager", "music-management"),
    ("ar-manager", "A&R менеджер", "A&R manager", "music-management"),
    ("vocal-teacher", "Преподаватель вокала", "Vocal teacher", "music-education"),
    ("guitar-teacher", "Преподаватель гитары", "Guitar teacher", "music-education"),
    ("piano-teacher", "Преподаватель фортепиано", "Piano teacher", "music-education"),
    ("music-theorist", "Музыкальный теоретик", "Music theorist", "music-education"),
    ("solfeggio-tutor", "Репетитор по сольфеджио", "Solfeggio tutor", "music-education"),
]

SERVICES: List[SeedRow] = [
    ("track-production", "Продакшн трека", "Track production", "producer"),
    ("beat-making", "Создание битов", "Beat making", "beatmaker"),
    ("arrangement", "Аранжировка", "Arrangement", "arranger"),
    ("songwriting", "Написание музыки", "Songwriting", "composer"),
    ("session-vocals", "Сессионный вокал", "Session vocals", "vocalist"),
    ("session-guitar", "Сессионная гитара", "Session guitar", "guitarist"),
    ("session-drums", "Сессионные барабаны", "Session drums", "drummer"),
    ("dj-set", "Диджей-сет", "DJ set", "dj"),
    ("mixing", "Сведение", "Mixing", "mixing-engineer"),
    ("mastering", "Мастеринг", "Mastering", "mastering-engineer"),
    ("studio-recording", "Студийная запись", "Studio recording", "recording-engineer"),
    ("live-sound", "Концертный звук", "Live sound", "live-sound-operator"),
    ("booking", "Букинг", "Booking", "booking-agent"),
    ("vocal-lessons", "Уроки вокала", "Vocal lessons", "vocal-teacher"),
    ("guitar-lessons", "Уроки гитары", "Guitar lessons", "guitar-teacher"),
]

GENRES: List[SeedRow] = [
    ("production-hiphop", "Хип-хоп", "Hip-hop", "track-production"),
    ("production-pop", "Поп", "Pop", "track-production"),
    ("beats-trap", "Трэп", "Trap", "beat-making"),
    ("beats-lofi", "Лоу-фай", "Lo-fi", "beat-making"),
    ("vocals-pop", "Поп", "Pop", "session-vocals"),
    ("vocals-jazz", "Джаз", "Jazz", "session-vocals"),
    ("guitar-rock", "Рок", "Rock", "session-guitar"),
    ("guitar-blues", "Блюз", "Blues", "session-guitar"),
    ("drums-rock", "Рок", "Rock", "session-drums"),
    ("dj-house", "Хаус", "House", "dj-set"),
    ("dj-techno", "Техно", "Techno", "dj-set"),
    ("mixing-rock", "Рок", "Rock", "mixing"),
    ("mixing-electronic", "Электроника", "Electronic", "mixing"),
    ("mastering-electronic", "Электроника", "Electronic", "mastering"),
]

WORK_FORMATS: List[SeedRow] = [
    ("remote", "Удалённо", "Remote", None),
    ("on-site", "На месте", "On site", None),
    ("hybrid", "Гибрид", "Hybrid", None),
]

EMPLOYMENT_TYPES: List[SeedRow] = [
    ("one-off", "Разовый проект", "One-off project", None),
    ("part-time", "Частичная занятость", "Part-time", None),
    ("full-time", "Полная занятость", "Full-time", None),
]

SKILL_LEVELS: List[SeedRow] = [
    ("beginner", "Начинающий", "Beginner", None),
    ("intermediate", "Средний уровень", "Intermediate", None),
    ("professional", "Профессионал", "Professional", None),
]

AVAILABILITIES: List[SeedRow] = [
    ("weekdays", "Будни", "Weekdays", None),
    ("weekends", "Выходные", "Weekends", None),
    ("evenings", "Вечера", "Evenings", None),
    ("anytime", "В любое время", "Anytime", None),
]

SEED_DATA: Dict[FacetId, List[SeedRow]] = {
    FacetId.FIELD: FIELDS,
    FacetId.PROFESSION: PROFESSIONS,
    FacetId.SERVICE: SERVICES,
    FacetId.GENRE: GENRES,
    FacetId.WORK_FORMAT: WORK_FORMATS,
    FacetId.EMPLOYMENT_TYPE: EMPLOYMENT_TYPES,
    FacetId.SKILL_LEVEL: SKILL_LEVELS,
    FacetId.AVAILABILITY: AVAILABILITIES,
}


async def seed_reference_data(
    db_manager: SQLModelDatabaseManager,
    data: Optional[Dict[FacetId, List[SeedRow]]] = None,
) -> int:
    """Upsert reference rows parent-first. Returns the number of rows written."""
    data = data or SEED_DATA
    written = 0

    async with db_manager.get_session() as session:
        for facet_id, (table, parent_column) in REFERENCE_TABLES.items():
            for position, (option_id, name, name_en, parent_id) in enumerate(data.get(facet_id, [])):
                values = {"id": option_id, "name": name, "name_en": name_en, "sort_order": position}
                if parent_column:
                    values[parent_column] = parent_id
                await session.merge(table(**values))
                written += 1
            # Parents must exist before children reference them
            await session.flush()

    logger.info("Reference data seeded", rows=written)
    return written


__all__ = ["SEED_DATA", "SeedRow", "seed_reference_data"]
