"""
Módulo core con la lógica principal del robot de gestos.
Contiene el intérprete de posturas, el render de gestos, el loop de
predicción y el gestor de la sesión de cámara.
"""

from .errors import DeviceAcquireError, ModelLoadError, RobotGestureError
from .gesture_renderer import render_gesture
from .interpreter import interpret
from .poller import FrameScheduler, PredictionPoller
from .session import CameraSessionManager, Session

__all__ = [
    'CameraSessionManager', 'DeviceAcquireError', 'FrameScheduler', 'ModelLoadError',
    'PredictionPoller', 'RobotGestureError', 'Session', 'interpret', 'render_gesture',
]
