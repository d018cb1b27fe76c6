"""Tolerantný Pydantic model pre návrh ťahu z prezentačnej vrstvy.

Zjednotí rôzne vstupné varianty (`start` vs. `row`/`col`, rôzne zápisy
smeru, blanky ako indexy) na kanonický `PlacementRequest`.

Poznámka (SK): Používame Pydantic v2, preto `field_validator` namiesto
historického `validator`.
"""
from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from .types import Direction, PlacementRequest, Tile

log = logging.getLogger("scrabkeeper.schema")

_DIRECTION_ALIASES: dict[str, str] = {
    "HORIZONTAL": "horizontal",
    "H": "horizontal",
    "ACROSS": "horizontal",
    "VERTICAL": "vertical",
    "V": "vertical",
    "DOWN": "vertical",
}


class Coord(BaseModel):
    """Súradnica na doske (horná hranica sa overí až voči doske)."""

    row: int = Field(..., ge=0)
    col: int = Field(..., ge=0)


class PlacementModel(BaseModel):
    """Návrh ťahu: celé slovo od začiatku v danom smere.

    - Toleruje `row`/`col` alebo `start={row,col}`.
    - `direction` akceptuje horizontal/vertical, h/v aj across/down.
    - `blanks` = indexy písmen vo `word`, ktoré sú blanky.
    """

    row: int | None = Field(None, ge=0)
    col: int | None = Field(None, ge=0)
    start: Coord | None = None
    direction: str = "horizontal"
    word: str
    blanks: list[int] = Field(default_factory=list)

    @field_validator("direction", mode="before")
    @classmethod
    def _norm_dir(cls, v: str | None) -> str:
        """Normalizuje smer; prázdny -> 'horizontal'."""
        key = str(v or "horizontal").strip().upper()
        if key not in _DIRECTION_ALIASES:
            raise ValueError("direction_invalid")
        return _DIRECTION_ALIASES[key]

    @field_validator("word")
    @classmethod
    def _letters_only(cls, v: str) -> str:
        """Slovo musí byť neprázdne a obsahovať iba písmená."""
        s = str(v).strip()
        if not s:
            raise ValueError("word_empty")
        if not s.isalpha():
            raise ValueError("word_letters_only")
        return s

    @model_validator(mode="after")
    def _check_start_and_blanks(self) -> "PlacementModel":
        if self.start is None and (self.row is None or self.col is None):
            raise ValueError("start_required")
        for idx in self.blanks:
            if not 0 <= idx < len(self.word):
                raise ValueError(f"blank_index_out_of_range:{idx}")
        return self

    def canonical_start(self) -> Coord:
        """Vráti kanonický začiatok (`start` preferovaný pred `row`/`col`)."""
        if self.start is not None:
            return self.start
        assert self.row is not None and self.col is not None
        return Coord(row=self.row, col=self.col)

    def to_request(self, *, case_encoded_blanks: bool = False) -> PlacementRequest:
        """Prevedie model na `PlacementRequest` s explicitným príznakom blanku.

        `case_encoded_blanks=True` podporí starý zápis, kde malé písmeno = blank.
        Mimo tejto hranice sa veľkosť písmen na blanky nikdy nepoužíva.
        """
        start = self.canonical_start()
        blank_idx = set(self.blanks)
        letters: list[Tile] = []
        for i, ch in enumerate(self.word):
            is_blank = i in blank_idx
            # 'ß' nema jednoznakove velke pismeno, nepovazuje sa za blank
            if case_encoded_blanks and ch.islower() and len(ch.upper()) == 1:
                is_blank = True
            letters.append(Tile(ch, is_blank))
        return PlacementRequest(
            start_row=start.row,
            start_col=start.col,
            direction=Direction(self.direction),
            letters=tuple(letters),
        )


def parse_placement_request(
    data: Mapping[str, Any] | str,
    *,
    case_encoded_blanks: bool = False,
) -> PlacementRequest:
    """Z JSON reťazca alebo slovníka vytvorí `PlacementRequest`.

    Pri neplatnom vstupe vyhodí `ValueError` (Pydantic `ValidationError`
    je jeho podtriedou) s kódom dôvodu v texte.
    """
    if isinstance(data, str):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as exc:
            raise ValueError(f"invalid_json: {exc.msg}") from exc
    if not isinstance(data, Mapping):
        raise ValueError("payload_must_be_object")
    model = PlacementModel.model_validate(dict(data))
    request = model.to_request(case_encoded_blanks=case_encoded_blanks)
    log.debug(
        "placement_parsed start=(%s,%s) dir=%s word=%s",
        request.start_row,
        request.start_col,
        request.direction.value,
        request.word,
    )
    return request


def to_request_payload(request: PlacementRequest) -> dict[str, Any]:
    """Kanonický JSON-serializovateľný tvar návrhu (opak `parse_placement_request`)."""
    return {
        "row": request.start_row,
        "col": request.start_col,
        "direction": request.direction.value,
        "word": request.word,
        "blanks": [i for i, t in enumerate(request.letters) if t.is_blank],
    }
