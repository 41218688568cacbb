"""
Intérprete de posturas.

Este módulo reduce la salida del clasificador (lista de clases con probabilidad)
a un único comando de gesto para el robot.
"""

from core.types import GestureCommand, GestureKind

PREDICTION_THRESHOLD = 0.5

# ============================================================================
# REGLAS DE COINCIDENCIA
# El orden es la política de desempate: la primera regla que coincide gana
# (ej: "ambos derecha" -> RAISE_BOTH, nunca RAISE_RIGHT)
# ============================================================================
LABEL_RULES = (
    (("ambos",), GestureKind.RAISE_BOTH),
    (("indeterminado",), GestureKind.INDETERMINATE),
    (("derecha", "right"), GestureKind.RAISE_RIGHT),
    (("izquierda", "left"), GestureKind.RAISE_LEFT),
)


def top_prediction(predictions):
    """
    Busca la clase con mayor probabilidad.

    Args:
        predictions (iterable): Objetos con class_name y probability

    Returns:
        tuple: (class_name, probability), o (None, 0.0) si no hay candidatos

    En caso de empate gana la primera clase encontrada (orden del modelo).
    Probabilidades NaN nunca superan a la actual y quedan descartadas.
    """
    best_name = None
    best_prob = 0.0
    for prediction in predictions or ():
        if prediction.probability > best_prob:
            best_prob = prediction.probability
            best_name = prediction.class_name
    return best_name, best_prob


def classify_label(label):
    """
    Clasifica una etiqueta por subcadenas, sin distinguir mayúsculas ni espacios.

    Args:
        label (str): Nombre de clase tal como lo produce el modelo

    Returns:
        GestureKind: Tipo de gesto (UNKNOWN si ninguna regla coincide)
    """
    normalized = label.lower().strip()
    for keywords, kind in LABEL_RULES:
        if any(keyword in normalized for keyword in keywords):
            return kind
    return GestureKind.UNKNOWN


def interpret(predictions, threshold=PREDICTION_THRESHOLD):
    """
    Convierte un resultado de clasificación en un comando de gesto.

    Args:
        predictions (iterable): Resultado de clasificación de un frame
        threshold (float): La probabilidad ganadora debe superarlo estrictamente

    Returns:
        GestureCommand: Siempre exactamente un comando (función total)
    """
    label, probability = top_prediction(predictions)
    if label is None or not probability > threshold:
        return GestureCommand(GestureKind.NONE, probability)

    return GestureCommand(classify_label(label), probability, label)
