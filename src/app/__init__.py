"""
Módulo de la aplicación principal.
Contiene la clase que integra todos los componentes.
"""

from .robot_app import RobotGestureApp

__all__ = ['RobotGestureApp']
