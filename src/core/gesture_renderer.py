"""
Aplicación de comandos de gesto sobre el estado visual del robot.
"""

from core.types import GestureKind, STATUS_WAITING

# (brazo izquierdo, brazo derecho, texto) por tipo de gesto
_ARM_FLAGS = {
    GestureKind.RAISE_BOTH: (True, True, "both raised"),
    GestureKind.RAISE_RIGHT: (False, True, "right raised"),
    GestureKind.RAISE_LEFT: (True, False, "left raised"),
    GestureKind.INDETERMINATE: (False, False, "indeterminate"),
}


def format_percent(probability):
    """Probabilidad 0..1 como porcentaje entero: 0.82 -> '82%'."""
    return f"{round(probability * 100)}%"


def render_gesture(cmd, state):
    """
    Sobrescribe el estado visual con el comando más reciente.

    Args:
        cmd (GestureCommand): Comando producido por el intérprete
        state (DisplayState): Estado a modificar (no se guarda historial)

    Returns:
        DisplayState: El mismo objeto recibido, ya actualizado
    """
    if cmd.kind is GestureKind.NONE:
        state.left_arm_raised = False
        state.right_arm_raised = False
        state.status_text = STATUS_WAITING
        return state

    percent = format_percent(cmd.probability)
    if cmd.kind is GestureKind.UNKNOWN:
        left, right, text = False, False, cmd.label
    else:
        left, right, text = _ARM_FLAGS[cmd.kind]

    state.left_arm_raised = left
    state.right_arm_raised = right
    state.status_text = f"{text} ({percent})"
    return state


def reset_display(state):
    """Vuelve al estado neutro: brazos abajo y esperando postura."""
    state.left_arm_raised = False
    state.right_arm_raised = False
    state.status_text = STATUS_WAITING
    return state
