"""
Módulo de síntesis de voz.
Contiene el anuncio por voz de los gestos del robot.
"""

from .feedback import VoiceFeedback

__all__ = ['VoiceFeedback']
