from pydantic import BaseModel


class FacilityOut(BaseModel):
    name: str
    capacity: int


class SubGroupOut(BaseModel):
    id: str
    students: int


class GroupOut(BaseModel):
    id: str
    students: int
    sub_groups: list[SubGroupOut]


class CatalogOut(BaseModel):
    days: list[str]
    time_slots: list[str]
    subjects: list[str]
    facilities: dict[str, list[FacilityOut]]
    groups: list[GroupOut]
