"""
Errores del robot de gestos.

Ambos son terminales para el intento de activación en curso: se capturan en
CameraSessionManager.start() y se muestran como estado de error.
"""


class RobotGestureError(Exception):
    """Error base del proyecto."""


class ModelLoadError(RobotGestureError):
    """El modelo remoto no se pudo descargar o interpretar."""


class DeviceAcquireError(RobotGestureError):
    """La cámara no está disponible (permisos, hardware ausente o en uso)."""
