from typing import Optional

from pydantic_models import Practitioner, PractitionerResult

DEFAULT_LOCATION = "Ireland"

DUBLIN = (
    Practitioner(name="Grand Canal Medical Clinic", specialty="General Practitioner",
                 address="21 Grand Canal Street Upper, Dublin 4, D04", phone="+353 1 555 2143", is_hospital=False),
    Practitioner(name="St. Stephen's Green Family Practice", specialty="General Practitioner",
                 address="8 Harcourt Street, Dublin 2, D02", phone="+353 1 555 0087", is_hospital=False),
    Practitioner(name="Dublin City Cardiology Centre", specialty="Cardiology",
                 address="45 Gardiner Street Upper, Dublin 1, D01", phone="+353 1 555 7321", is_hospital=False),
    Practitioner(name="Mater Misericordiae University Hospital", specialty="Emergency & General Hospital",
                 address="Eccles St, Phibsborough, Dublin 7, D07", phone="+353 1 803 2000", is_hospital=True),
)

CORK = (
    Practitioner(name="Lee Side Family Practice", specialty="General Practitioner",
                 address="14 Washington Street, Cork City, T12", phone="+353 21 555 6612", is_hospital=False),
    Practitioner(name="Cork Women's Health Clinic", specialty="Women's Health",
                 address="3 Patrick's Quay, Cork City, T12", phone="+353 21 555 7741", is_hospital=False),
    Practitioner(name="Cork University Hospital", specialty="Emergency & General Hospital",
                 address="Wilton, Cork, T12", phone="+353 21 492 2000", is_hospital=True),
)

GALWAY = (
    Practitioner(name="Eyre Square Medical Practice", specialty="General Practitioner",
                 address="12 Eyre Square, Galway, H91", phone="+353 91 555 1020", is_hospital=False),
    Practitioner(name="Galway Respiratory Clinic", specialty="Respiratory Medicine",
                 address="College Rd, Galway, H91", phone="+353 91 555 3344", is_hospital=False),
    Practitioner(name="University Hospital Galway", specialty="Emergency & General Hospital",
                 address="Newcastle Rd, Galway, H91", phone="+353 91 544 544", is_hospital=True),
)

# checked in this order; first substring hit wins
CITY_GROUPS = [
    ("dublin", DUBLIN),
    ("cork", CORK),
    ("galway", GALWAY),
]

DEFAULT_GROUP = (DUBLIN[0], CORK[0], GALWAY[0], DUBLIN[2], CORK[2])


def find_practitioners(location_query: Optional[str] = None) -> PractitionerResult:
    location = (location_query or DEFAULT_LOCATION).lower()
    for city, group in CITY_GROUPS:
        if city in location:
            return PractitionerResult(practitioners=list(group))
    return PractitionerResult(practitioners=list(DEFAULT_GROUP))
