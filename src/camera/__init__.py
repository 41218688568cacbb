"""
Módulo de captura de video.
Contiene la webcam espejada que alimenta al modelo y a la vista previa.
"""

from .webcam import Webcam

__all__ = ['Webcam']
