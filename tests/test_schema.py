from __future__ import annotations

import pytest
from pydantic import ValidationError

from scrabkeeper.core.schema import (
    PlacementModel,
    parse_placement_request,
    to_request_payload,
)
from scrabkeeper.core.types import Direction, Tile


def test_row_col_payload() -> None:
    req = parse_placement_request({"row": 7, "col": 7, "direction": "across", "word": "cat"})
    assert (req.start_row, req.start_col) == (7, 7)
    assert req.direction is Direction.HORIZONTAL
    assert req.letters == (Tile("C"), Tile("A"), Tile("T"))


def test_start_object_and_json_string() -> None:
    req = parse_placement_request('{"start": {"row": 3, "col": 4}, "direction": "v", "word": "DOG"}')
    assert (req.start_row, req.start_col) == (3, 4)
    assert req.direction is Direction.VERTICAL


def test_blank_indexes_are_explicit() -> None:
    req = parse_placement_request({"row": 7, "col": 7, "word": "QI", "blanks": [0]})
    assert req.letters[0] == Tile("Q", is_blank=True)
    assert not req.letters[1].is_blank
    # bez case_encoded_blanks male pismeno blank neznamena
    req = parse_placement_request({"row": 7, "col": 7, "word": "qi"})
    assert not any(t.is_blank for t in req.letters)


def test_case_encoded_blanks_at_boundary() -> None:
    req = parse_placement_request({"row": 7, "col": 7, "word": "CaT"}, case_encoded_blanks=True)
    assert [t.is_blank for t in req.letters] == [False, True, False]
    assert req.word == "CAT"
    # 'ß' nema jednoznakove velke pismeno -> nie je blank
    req = parse_placement_request({"row": 7, "col": 7, "word": "Maß"}, case_encoded_blanks=True)
    assert req.letters[2] == Tile("ß")


@pytest.mark.parametrize(
    ("payload", "reason"),
    [
        ({"row": 7, "col": 7, "word": ""}, "word_empty"),
        ({"row": 7, "col": 7, "word": "C4T"}, "word_letters_only"),
        ({"row": 7, "col": 7, "word": "CAT", "direction": "diagonal"}, "direction_invalid"),
        ({"row": 7, "word": "CAT"}, "start_required"),
        ({"row": 7, "col": 7, "word": "CAT", "blanks": [3]}, "blank_index_out_of_range:3"),
    ],
)
def test_invalid_payloads(payload, reason) -> None:
    with pytest.raises(ValidationError) as exc:
        PlacementModel.model_validate(payload)
    assert reason in str(exc.value)


def test_non_object_and_bad_json() -> None:
    with pytest.raises(ValueError, match="invalid_json"):
        parse_placement_request("{not json")
    with pytest.raises(ValueError, match="payload_must_be_object"):
        parse_placement_request("[1, 2]")
    with pytest.raises(ValueError):
        parse_placement_request({"row": -1, "col": 0, "word": "A"})


def test_payload_round_trip() -> None:
    payload = {"row": 2, "col": 5, "direction": "vertical", "word": "QI", "blanks": [1]}
    req = parse_placement_request(payload)
    assert to_request_payload(req) == payload
