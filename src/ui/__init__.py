"""
Módulo de interfaz de usuario.
Contiene el renderizador de la ventana del robot.
"""

from .renderer import UIRenderer

__all__ = ['UIRenderer']
