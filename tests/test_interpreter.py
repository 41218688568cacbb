import math

import pytest

from conftest import preds
from core.interpreter import classify_label, interpret, top_prediction
from core.types import GestureKind


@pytest.mark.parametrize("label, kind", [
    ("Ambos", GestureKind.RAISE_BOTH),
    ("Ambos Brazos", GestureKind.RAISE_BOTH),
    ("Indeterminado", GestureKind.INDETERMINATE),
    ("Derecha", GestureKind.RAISE_RIGHT),
    ("Right arm", GestureKind.RAISE_RIGHT),
    ("Izquierda", GestureKind.RAISE_LEFT),
    ("LEFT", GestureKind.RAISE_LEFT),
    ("Nada", GestureKind.UNKNOWN),
])
def test_label_rules(label, kind):
    cmd = interpret(preds((label, 0.9)))
    assert cmd.kind is kind
    assert cmd.probability == 0.9
    assert cmd.label == label


def test_priority_both_beats_right():
    assert interpret(preds(("ambos derecha", 0.7))).kind is GestureKind.RAISE_BOTH


def test_priority_indeterminate_beats_sides():
    assert classify_label("indeterminado izquierda") is GestureKind.INDETERMINATE


def test_priority_right_beats_left():
    assert classify_label("derecha-izquierda") is GestureKind.RAISE_RIGHT


@pytest.mark.parametrize("label", ["Derecha ", "derecha", " DERECHA"])
def test_case_and_whitespace_insensitive(label):
    assert interpret(preds((label, 0.6))).kind is GestureKind.RAISE_RIGHT


@pytest.mark.parametrize("prob", [0.5, 0.49, 0.3, 0.0])
def test_at_or_below_threshold_is_none(prob):
    cmd = interpret(preds(("Ambos", prob)))
    assert cmd.kind is GestureKind.NONE


def test_picks_maximum_probability():
    cmd = interpret(preds(("Derecha", 0.82), ("Izquierda", 0.10)))
    assert cmd.kind is GestureKind.RAISE_RIGHT
    assert cmd.probability == 0.82


def test_tie_first_encountered_wins():
    name, prob = top_prediction(preds(("Izquierda", 0.6), ("Derecha", 0.6)))
    assert name == "Izquierda"
    assert prob == 0.6


def test_empty_result_is_none():
    assert interpret([]).kind is GestureKind.NONE
    assert interpret(None).kind is GestureKind.NONE


def test_nan_probabilities_are_ignored():
    cmd = interpret(preds(("Derecha", math.nan), ("Izquierda", 0.7)))
    assert cmd.kind is GestureKind.RAISE_LEFT


def test_unknown_keeps_raw_label():
    cmd = interpret(preds(("  Saludo ", 0.95)))
    assert cmd.kind is GestureKind.UNKNOWN
    assert cmd.label == "  Saludo "


def test_custom_threshold():
    assert interpret(preds(("Derecha", 0.6)), threshold=0.7).kind is GestureKind.NONE
