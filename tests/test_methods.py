import pytest

from gemcalc.methods import (
    GematriaMethod,
    UnsupportedMethodError,
    bemilui_value,
    digital_root,
    gadol_value,
    hechrechi_value,
    katan_value,
    std_gematria_value,
    strategy_for,
)

STANDARD = [
    1, 2, 3, 4, 5, 6, 7, 8, 9,
    10, 20, 30, 40, 50, 60, 70, 80, 90,
    100, 200, 300, 400,
]

# final index -> base index (ך ם ן ף ץ)
FINALS = {23: 11, 24: 13, 25: 14, 26: 17, 27: 18}

UNIMPLEMENTED = [
    GematriaMethod.MISPAR_SIDURI,
    GematriaMethod.MISPAR_BONEH,
    GematriaMethod.MISPAR_MEUGAL,
    GematriaMethod.MISPAR_MUSAFI,
]


def test_std_gematria_value():
    assert [std_gematria_value(i) for i in range(1, 23)] == STANDARD


def test_hechrechi_finals_equal_base_letters():
    assert [hechrechi_value(i) for i in range(1, 23)] == STANDARD
    for final, base in FINALS.items():
        assert hechrechi_value(final) == hechrechi_value(base)


def test_gadol_finals_extend_hundreds():
    assert [gadol_value(i) for i in range(1, 23)] == STANDARD
    assert [gadol_value(i) for i in range(23, 28)] == [500, 600, 700, 800, 900]


def test_katan_is_single_digit():
    for i in range(1, 28):
        assert 1 <= katan_value(i) <= 9
    assert katan_value(19) == 1  # ק = 100
    assert katan_value(23) == 5  # ך = 500
    assert katan_value(27) == 9  # ץ = 900


def test_digital_root():
    assert digital_root(942) == 6
    assert digital_root(99) == 9
    assert digital_root(7) == 7
    assert digital_root(0) == 0


def test_bemilui_values():
    assert bemilui_value(1) == 111  # אלף
    assert bemilui_value(2) == 412  # בית
    assert bemilui_value(3) == 83   # גימל
    assert bemilui_value(5) == 6    # הא
    assert bemilui_value(22) == 416  # תיו


def test_bemilui_unspelled_or_unknown_index_is_zero():
    assert bemilui_value(23) == 0
    assert bemilui_value(99) == 0


def test_strategy_for_implemented_methods():
    s = strategy_for(GematriaMethod.MISPAR_GADOL)
    assert s.method is GematriaMethod.MISPAR_GADOL
    assert s.value_for_index(27) == 900

    s = strategy_for("otiyot-bemilui")
    assert s.method is GematriaMethod.OTIYOT_BEMILUI
    assert s.value_for_index(1) == 111


@pytest.mark.parametrize("method", UNIMPLEMENTED)
def test_strategy_for_unimplemented_methods_fails(method):
    with pytest.raises(UnsupportedMethodError) as exc:
        strategy_for(method)
    assert exc.value.method is method
    assert isinstance(exc.value, ValueError)
    assert method.value in str(exc.value)


def test_implemented_methods():
    assert set(GematriaMethod.implemented()) == {
        GematriaMethod.MISPAR_HECHRECHI,
        GematriaMethod.MISPAR_GADOL,
        GematriaMethod.MISPAR_KATAN,
        GematriaMethod.OTIYOT_BEMILUI,
    }
