"""Family record consumed by template extractors.

The record mirrors what the enrollment wizard collects. ``Family.from_dict``
accepts the camelCase payload the wizard stores; every key is optional so
partially filled records still build.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any


class ParentType(str, Enum):
    MOTHER = "mother"
    FATHER = "father"
    GUARDIAN = "guardian"


def _text(payload: dict, key: str) -> str:
    value = payload.get(key)
    return "" if value is None else str(value)


def _strings(payload: dict, key: str) -> list[str]:
    values = payload.get(key) or []
    if isinstance(values, str):
        return [values]
    return [str(value) for value in values if value is not None]


def _birth_date(value: Any) -> date | str | None:
    if value is None or isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return text


@dataclass(slots=True)
class Address:
    street: str = ""
    city: str = ""
    postal_code: str = ""
    country: str = ""

    @classmethod
    def from_dict(cls, payload: dict | None) -> Address:
        payload = payload or {}
        return cls(
            street=_text(payload, "street"),
            city=_text(payload, "city"),
            postal_code=_text(payload, "postalCode"),
            country=_text(payload, "country"),
        )


@dataclass(slots=True)
class MedicalInfo:
    allergies: list[str] = field(default_factory=list)
    medications: list[str] = field(default_factory=list)
    conditions: list[str] = field(default_factory=list)
    notes: str = ""

    @classmethod
    def from_dict(cls, payload: dict | None) -> MedicalInfo:
        payload = payload or {}
        return cls(
            allergies=_strings(payload, "allergies"),
            medications=_strings(payload, "medications"),
            conditions=_strings(payload, "conditions"),
            notes=_text(payload, "notes"),
        )


@dataclass(slots=True)
class Activity:
    id: str = ""
    name: str = ""
    selected: bool = False
    description: str = ""
    schedule: str = ""

    @classmethod
    def from_dict(cls, payload: dict) -> Activity:
        return cls(
            id=_text(payload, "id"),
            name=_text(payload, "name"),
            selected=bool(payload.get("selected", False)),
            description=_text(payload, "description"),
            schedule=_text(payload, "schedule"),
        )


@dataclass(slots=True)
class Student:
    first_name: str = ""
    last_name: str = ""
    birth_date: date | str | None = None
    grade: str = ""
    school: str = ""
    id: str = ""
    gender: str = ""
    medical_info: MedicalInfo | None = None
    activities: list[Activity] = field(default_factory=list)
    photo_authorization: bool = False
    transport_authorization: bool = False
    special_needs: str = ""

    @classmethod
    def from_dict(cls, payload: dict) -> Student:
        medical = payload.get("medicalInfo")
        return cls(
            first_name=_text(payload, "firstName"),
            last_name=_text(payload, "lastName"),
            birth_date=_birth_date(payload.get("birthDate")),
            grade=_text(payload, "grade"),
            school=_text(payload, "school"),
            id=_text(payload, "id"),
            gender=_text(payload, "gender").upper(),
            medical_info=MedicalInfo.from_dict(medical) if medical is not None else None,
            activities=[Activity.from_dict(item) for item in payload.get("activities") or []],
            photo_authorization=bool(payload.get("photoAuthorization", False)),
            transport_authorization=bool(payload.get("transportAuthorization", False)),
            special_needs=_text(payload, "specialNeeds"),
        )


@dataclass(slots=True)
class Parent:
    parent_type: ParentType | None = None
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    id: str = ""
    profession: str = ""
    work_address: Address | None = None
    work_phone: str = ""

    @classmethod
    def from_dict(cls, payload: dict) -> Parent:
        raw_type = payload.get("type")
        try:
            parent_type = ParentType(raw_type) if raw_type else None
        except ValueError:
            parent_type = None
        work_address = payload.get("workAddress")
        return cls(
            parent_type=parent_type,
            first_name=_text(payload, "firstName"),
            last_name=_text(payload, "lastName"),
            email=_text(payload, "email"),
            phone=_text(payload, "phone"),
            id=_text(payload, "id"),
            profession=_text(payload, "profession"),
            work_address=Address.from_dict(work_address) if work_address is not None else None,
            work_phone=_text(payload, "workPhone"),
        )


@dataclass(slots=True)
class EmergencyContact:
    first_name: str = ""
    last_name: str = ""
    relationship: str = ""
    phone: str = ""
    email: str = ""
    id: str = ""

    @classmethod
    def from_dict(cls, payload: dict) -> EmergencyContact:
        return cls(
            first_name=_text(payload, "firstName"),
            last_name=_text(payload, "lastName"),
            relationship=_text(payload, "relationship"),
            phone=_text(payload, "phone"),
            email=_text(payload, "email"),
            id=_text(payload, "id"),
        )


@dataclass(slots=True)
class Family:
    students: list[Student] = field(default_factory=list)
    parents: list[Parent] = field(default_factory=list)
    address: Address = field(default_factory=Address)
    emergency_contacts: list[EmergencyContact] = field(default_factory=list)
    id: str = ""

    @classmethod
    def from_dict(cls, payload: dict | None) -> Family:
        payload = payload or {}
        return cls(
            students=[Student.from_dict(item) for item in payload.get("students") or []],
            parents=[Parent.from_dict(item) for item in payload.get("parents") or []],
            address=Address.from_dict(payload.get("address")),
            emergency_contacts=[
                EmergencyContact.from_dict(item) for item in payload.get("emergencyContacts") or []
            ],
            id=_text(payload, "id"),
        )

    def student(self, index: int = 0) -> Student | None:
        if 0 <= index < len(self.students):
            return self.students[index]
        return None

    def parent(self, index: int = 0) -> Parent | None:
        if 0 <= index < len(self.parents):
            return self.parents[index]
        return None

    def parent_of_type(self, parent_type: ParentType) -> Parent | None:
        for parent in self.parents:
            if parent.parent_type is parent_type:
                return parent
        return None

    def emergency_contact(self, index: int = 0) -> EmergencyContact | None:
        if 0 <= index < len(self.emergency_contacts):
            return self.emergency_contacts[index]
        return None
