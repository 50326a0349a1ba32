import pytest

from practitioners import CORK, DEFAULT_GROUP, DUBLIN, GALWAY, find_practitioners


def names(result):
    return [p.name for p in result.practitioners]


def test_dublin_query_returns_dublin_group_in_order():
    result = find_practitioners("Dublin, Ireland")
    assert result.practitioners == list(DUBLIN)
    assert names(result) == [
        "Grand Canal Medical Clinic",
        "St. Stephen's Green Family Practice",
        "Dublin City Cardiology Centre",
        "Mater Misericordiae University Hospital",
    ]


def test_cork_query_returns_cork_group():
    result = find_practitioners("Cork")
    assert result.practitioners == list(CORK)
    assert len(result.practitioners) == 3


def test_galway_match_is_case_insensitive():
    assert find_practitioners("GALWAY city centre").practitioners == list(GALWAY)


def test_priority_order_dublin_before_cork():
    assert find_practitioners("cork or dublin").practitioners == list(DUBLIN)


@pytest.mark.parametrize("query", ["", None, "Atlantis", "Eircode D02 F205"])
def test_unmatched_queries_return_default_mix(query):
    result = find_practitioners(query)
    assert result.practitioners == list(DEFAULT_GROUP)
    assert names(result) == [
        "Grand Canal Medical Clinic",
        "Lee Side Family Practice",
        "Eyre Square Medical Practice",
        "Dublin City Cardiology Centre",
        "Cork University Hospital",
    ]


def test_lookup_is_repeatable_and_does_not_share_lists():
    first = find_practitioners("dublin")
    first.practitioners.clear()
    assert find_practitioners("dublin").practitioners == list(DUBLIN)


def test_hospitals_are_flagged():
    hospitals = [p.name for p in find_practitioners("cork").practitioners if p.is_hospital]
    assert hospitals == ["Cork University Hospital"]
