from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from functools import partial
from typing import Callable, Dict, List, Mapping, Tuple

from .letters import CHAR_TO_INDEX, FILLED_LETTERS, letter_for_index

logger = logging.getLogger(__name__)

class GematriaMethod(str, Enum):
    MISPAR_HECHRECHI = "mispar-hechrechi"
    MISPAR_GADOL = "mispar-gadol"
    MISPAR_KATAN = "mispar-katan"
    MISPAR_SIDURI = "mispar-siduri"
    MISPAR_BONEH = "mispar-boneh"
    MISPAR_MEUGAL = "mispar-meugal"
    MISPAR_MUSAFI = "mispar-musafi"
    OTIYOT_BEMILUI = "otiyot-bemilui"

    @classmethod
    def implemented(cls) -> List["GematriaMethod"]:
        return [m for m in cls if m in _FACTORIES]

    def __str__(self) -> str:
        return self.value

class UnsupportedMethodError(ValueError):
    """Raised when a method is enumerated but has no calculation behind it."""

    def __init__(self, method: GematriaMethod):
        self.method = method
        super().__init__(f"{method.value} is not yet implemented to calculate gematria values.")

def std_gematria_value(letter_index: int) -> int:
    """
    Standard value of the letter at 1-based alphabet position `letter_index`.

      f(x) = 10 ** ((x - 1) // 9) * ((x - 1) % 9 + 1)

    א..ט -> 1..9, י..צ -> 10..90, ק..ת -> 100..400.
    """
    return 10 ** ((letter_index - 1) // 9) * ((letter_index - 1) % 9 + 1)

# Final forms (indices 23..27: ך ם ן ף ץ)
_FINALS_HECHRECHI = {23: 20, 24: 40, 25: 50, 26: 80, 27: 90}
_FINALS_GADOL = {23: 500, 24: 600, 25: 700, 26: 800, 27: 900}

def digital_root(value: int) -> int:
    while value >= 10:
        value = sum(int(d) for d in str(value))
    return value

def hechrechi_value(letter_index: int) -> int:
    return _FINALS_HECHRECHI.get(letter_index) or std_gematria_value(letter_index)

def gadol_value(letter_index: int) -> int:
    return _FINALS_GADOL.get(letter_index) or std_gematria_value(letter_index)

def katan_value(letter_index: int) -> int:
    return digital_root(gadol_value(letter_index))

def bemilui_value(
    letter_index: int,
    filled_letters: Mapping[str, Tuple[str, ...]] = FILLED_LETTERS,
    char_to_index: Mapping[str, int] = CHAR_TO_INDEX,
) -> int:
    """Sum of the letter's spelled-out name, each letter counted by Mispar Hechrechi."""
    letter = letter_for_index(letter_index, char_to_index)
    if letter is None:
        return 0
    total = 0
    for ch in filled_letters.get(letter, ()):
        idx = char_to_index.get(ch)
        if idx is not None:
            total += hechrechi_value(idx)
    return total

@dataclass(frozen=True)
class Strategy:
    method: GematriaMethod
    value_for_index: Callable[[int], int]

_FACTORIES: Dict[GematriaMethod, Callable[[Mapping[str, int]], Callable[[int], int]]] = {
    GematriaMethod.MISPAR_HECHRECHI: lambda _table: hechrechi_value,
    GematriaMethod.MISPAR_GADOL: lambda _table: gadol_value,
    GematriaMethod.MISPAR_KATAN: lambda _table: katan_value,
    GematriaMethod.OTIYOT_BEMILUI: lambda table: partial(
        bemilui_value, filled_letters=FILLED_LETTERS, char_to_index=table
    ),
}

def strategy_for(method: GematriaMethod, char_to_index: Mapping[str, int] = CHAR_TO_INDEX) -> Strategy:
    """Build the strategy for `method`; unimplemented methods fail here, never later."""
    method = GematriaMethod(method)
    factory = _FACTORIES.get(method)
    if factory is None:
        logger.warning("Requested unsupported gematria method: %s", method.value)
        raise UnsupportedMethodError(method)
    logger.debug("Built strategy for %s", method.value)
    return Strategy(method=method, value_for_index=factory(char_to_index))
