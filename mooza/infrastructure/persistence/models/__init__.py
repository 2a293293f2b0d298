"""
Infrastructure persistence models module.

This module contains database table definitions, separated from domain
models and business logic.
"""

from mooza.infrastructure.persistence.models.reference_tables import (
    AvailabilityTable,
    EmploymentTypeTable,
    FieldOfActivityTable,
    GenreTable,
    ProfessionTable,
    ReferenceOptionBase,
    ServiceTable,
    SkillLevelTable,
    WorkFormatTable,
)
from mooza.infrastructure.persistence.models.user_tables import (
    SearchProfileTable,
    UserTable,
)

__all__ = [
    "ReferenceOptionBase",
    "FieldOfActivityTable",
    "ProfessionTable",
    "ServiceTable",
    "GenreTable",
    "WorkFormatTable",
    "EmploymentTypeTable",
    "SkillLevelTable",
    "AvailabilityTable",
    "UserTable",
    "SearchProfileTable",
]
