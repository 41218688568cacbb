"""
Módulo de configuración del robot de gestos.
Contiene la clase de configuración de cámara, modelo y preferencias.
"""

from .settings import RobotConfig

__all__ = ['RobotConfig']
