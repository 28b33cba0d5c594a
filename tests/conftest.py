from __future__ import annotations

from io import BytesIO

import pytest
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from schoolforms.model.family import Family


def make_pdf(pages: int = 1, text: str = "Formulaire officiel", with_form: bool = False) -> bytes:
    """A small source document standing in for an official form."""
    buffer = BytesIO()
    report = canvas.Canvas(buffer, pagesize=A4)
    for page_index in range(pages):
        report.setFont("Helvetica", 12)
        report.drawString(72, 800, f"{text} page {page_index + 1}")
        if with_form and page_index == 0:
            report.acroForm.textfield(name="test.name", x=72, y=700, width=200, height=20, value="")
            report.acroForm.checkbox(name="test.homme", x=72, y=660, size=12, checked=False)
            report.acroForm.checkbox(name="test.femme", x=120, y=660, size=12, checked=False)
            report.acroForm.textfield(
                name="other", x=72, y=620, width=200, height=20, value="", borderColor=colors.black
            )
        report.showPage()
    report.save()
    return buffer.getvalue()


@pytest.fixture
def emma_family() -> Family:
    return Family.from_dict(
        {
            "id": "family-1",
            "address": {"street": "12 rue des Écoles", "city": "Lyon", "postalCode": "69001", "country": "France"},
            "students": [
                {
                    "firstName": "Emma",
                    "lastName": "Martin",
                    "birthDate": "2016-09-12",
                    "grade": "CM1",
                    "school": "École Jean Moulin",
                    "gender": "f",
                    "medicalInfo": {"allergies": ["Arachides", "Pollen"], "medications": [], "notes": ""},
                    "activities": [
                        {"id": "cantine", "name": "Cantine", "selected": True},
                        {"id": "etude", "name": "Étude", "selected": False},
                    ],
                    "photoAuthorization": True,
                }
            ],
            "parents": [
                {
                    "type": "mother",
                    "firstName": "Claire",
                    "lastName": "Martin",
                    "email": "claire.martin@example.fr",
                    "phone": "06 12 34 56 78",
                    "profession": "Architecte",
                    "workAddress": {"street": "Cabinet Dupont"},
                },
                {"type": "father", "firstName": "Paul", "lastName": "Martin", "phone": "06 98 76 54 32"},
            ],
            "emergencyContacts": [
                {"firstName": "Jeanne", "lastName": "Durand", "relationship": "Grand-mère", "phone": "04 78 00 00 00"}
            ],
        }
    )


@pytest.fixture
def empty_family() -> Family:
    return Family()


@pytest.fixture
def pdf_factory():
    return make_pdf
