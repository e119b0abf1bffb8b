from fastapi import APIRouter

from classgrid.core.catalog import (
    DAYS,
    FACILITY_POOLS,
    GROUP_STUDENTS,
    GROUPS,
    SUB_GROUP_STUDENTS,
    SUB_GROUPS,
    SUBJECTS,
    TIME_SLOTS,
)
from classgrid.schemas.catalog import CatalogOut, FacilityOut, GroupOut, SubGroupOut

router = APIRouter()


@router.get("", response_model=CatalogOut)
def get_catalog() -> CatalogOut:
    return CatalogOut(
        days=DAYS,
        time_slots=TIME_SLOTS,
        subjects=SUBJECTS,
        facilities={
            session_type.value: [FacilityOut(name=name, capacity=capacity) for name, capacity in pool.items()]
            for session_type, pool in FACILITY_POOLS.items()
        },
        groups=[
            GroupOut(
                id=group,
                students=GROUP_STUDENTS,
                sub_groups=[SubGroupOut(id=sub_group, students=SUB_GROUP_STUDENTS) for sub_group in SUB_GROUPS[group]],
            )
            for group in GROUPS
        ],
    )
