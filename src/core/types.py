"""
Tipos de datos compartidos entre el sesionador, el poller y la interfaz.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


@dataclass(frozen=True)
class Prediction:
    """Una clase del modelo con su probabilidad (0..1)."""
    class_name: str
    probability: float


@dataclass(frozen=True)
class Keypoint:
    """Keypoint 2D en píxeles del frame espejado."""
    name: str
    x_px: float
    y_px: float
    score: float


@dataclass(frozen=True)
class Pose:
    width: int
    height: int
    keypoints: List[Keypoint] = field(default_factory=list)


class GestureKind(Enum):
    RAISE_BOTH = "raise_both"
    RAISE_RIGHT = "raise_right"
    RAISE_LEFT = "raise_left"
    INDETERMINATE = "indeterminate"
    UNKNOWN = "unknown"
    NONE = "none"


@dataclass(frozen=True)
class GestureCommand:
    kind: GestureKind
    probability: float = 0.0
    label: str = ""


STATUS_WAITING = "waiting"


@dataclass
class DisplayState:
    left_arm_raised: bool = False
    right_arm_raised: bool = False
    status_text: str = STATUS_WAITING


class StatusStyle(Enum):
    NEUTRAL = "neutral"
    ACTIVE = "active"
    ERROR = "error"


@dataclass
class SystemStatus:
    text: str = "Press C to activate the camera"
    style: StatusStyle = StatusStyle.NEUTRAL


@dataclass
class ToggleControl:
    label: str = "Activate camera"
    active: bool = False


@dataclass
class UiState:
    """Todo lo que la ventana necesita para dibujar un frame."""
    display: DisplayState = field(default_factory=DisplayState)
    status: SystemStatus = field(default_factory=SystemStatus)
    toggle: ToggleControl = field(default_factory=ToggleControl)
    pose: Optional[Pose] = None
