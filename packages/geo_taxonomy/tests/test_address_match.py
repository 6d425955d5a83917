from packages.geo_taxonomy.match import (
    AddressMatcher,
    build_district_index,
    build_state_lookup,
    extract_postal_code,
    match_location,
)
from packages.geo_taxonomy.types import GeoTaxonomy, State


def _taxonomy() -> GeoTaxonomy:
    return GeoTaxonomy(
        states=[
            State(name="Delhi", districts=["Central Delhi", "South Delhi"]),
            State(name="Kerala", districts=["Ernakulam", "Wayanad"]),
            State(name="Maharashtra", districts=["Aurangabad", "Pune"]),
        ]
    )


def test_extract_postal_code_finds_six_digit_run() -> None:
    assert extract_postal_code("123 Medical St, New Delhi 110001") == "110001"


def test_extract_postal_code_returns_none_without_code() -> None:
    assert extract_postal_code("No code here") is None
    assert extract_postal_code("") is None
    assert extract_postal_code(None) is None


def test_extract_postal_code_ignores_longer_digit_runs() -> None:
    assert extract_postal_code("Phone 9876543210, Pune") is None
    assert extract_postal_code("Ward 12345, Pune 411001") == "411001"


def test_extract_postal_code_returns_first_match() -> None:
    assert extract_postal_code("Kochi 682001, alt 682002") == "682001"


def test_match_location_state_without_known_district() -> None:
    location = match_location("123 MG Road, New Delhi, Delhi", _taxonomy())
    assert location.state == "Delhi"
    assert location.district is None


def test_match_location_state_and_district_case_insensitive() -> None:
    location = match_location("12 Beach Road, ernakulam , KERALA", _taxonomy())
    assert location.state == "Kerala"
    assert location.district == "ernakulam"


def test_match_location_last_fragment_wins() -> None:
    location = match_location("Pune, Kerala, Wayanad, Maharashtra", _taxonomy())
    assert location.state == "Maharashtra"
    assert location.district == "Wayanad"


def test_match_location_district_index_is_not_scoped_to_state() -> None:
    location = match_location("Ward 4, Aurangabad, Kerala", _taxonomy())
    assert location.state == "Kerala"
    assert location.district == "Aurangabad"


def test_match_location_requires_whole_fragment() -> None:
    location = match_location("Delhi Road Pune 411001", _taxonomy())
    assert location.is_empty()


def test_match_location_empty_address() -> None:
    assert match_location("", _taxonomy()).is_empty()
    assert match_location(None, _taxonomy()).is_empty()


def test_indices_cover_every_state_and_district() -> None:
    taxonomy = _taxonomy()
    assert build_state_lookup(taxonomy) == {
        "delhi": "Delhi",
        "kerala": "Kerala",
        "maharashtra": "Maharashtra",
    }
    index = build_district_index(taxonomy)
    assert {"central delhi", "Central Delhi", "pune", "Pune"} <= index


def test_address_matcher_reuses_indices_across_addresses() -> None:
    matcher = AddressMatcher(_taxonomy())
    first = matcher.match("1 Main St, South Delhi, Delhi 110017")
    second = matcher.match("2 Hill Rd, Pune, Maharashtra")
    assert (first.state, first.district) == (None, "South Delhi")
    assert (second.state, second.district) == ("Maharashtra", "Pune")


def test_extract_postal_code_only_accepts_ascii_digits() -> None:
    assert extract_postal_code("AIIMS, Delhi ११०००१") is None
    assert extract_postal_code("AIIMS, Delhi ११०००१, alt 110029") == "110029"
