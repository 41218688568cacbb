"""
Anuncio por voz de los gestos del robot usando pyttsx3.

La síntesis se ejecuta en un hilo aparte para no bloquear la ventana ni el
loop de predicción.
"""

import threading
from collections import deque

import pyttsx3

from core.types import GestureKind

GESTURE_PHRASES = {
    GestureKind.RAISE_BOTH: "ambos brazos",
    GestureKind.RAISE_RIGHT: "brazo derecho",
    GestureKind.RAISE_LEFT: "brazo izquierdo",
    GestureKind.INDETERMINATE: "postura indeterminada",
}


# ============================================================================
# CLASE: VoiceFeedback
# Propósito: Feedback auditivo de los gestos detectados
# Responsabilidades:
#   - Sintetizar texto a voz en español
#   - Ejecutar en hilo separado para no bloquear la UI
#   - Gestionar cola de mensajes para evitar solapamiento
# ============================================================================
class VoiceFeedback:
    """
    Sistema de voz.

    Características:
        - Ejecución asíncrona en un hilo daemon
        - Cola de máximo 5 mensajes (los más viejos se descartan)
        - Si pyttsx3 no inicializa, la voz queda desactivada
    """

    def __init__(self, config):
        """
        Args:
            config (RobotConfig): Configuración con voice_enabled, voice_volume y voice_rate
        """
        self.config = config
        self.engine = None
        self.is_speaking = False
        self.message_queue = deque(maxlen=5)
        self._lock = threading.Lock()

        try:
            self.engine = pyttsx3.init()
            self._configure_engine()
            print("✓ Sistema de voz inicializado correctamente")
        except Exception as e:
            print(f"⚠ Advertencia: No se pudo inicializar el sistema de voz: {e}")
            self.config.voice_enabled = False

    def _configure_engine(self):
        """Aplica volumen y velocidad, y elige una voz en español si existe."""
        self.engine.setProperty('volume', self.config.voice_volume)
        self.engine.setProperty('rate', self.config.voice_rate)

        for voice in self.engine.getProperty('voices') or []:
            languages = ' '.join(str(lang) for lang in (getattr(voice, 'languages', None) or []))
            descriptor = f"{voice.id} {voice.name} {languages}".lower()
            if 'es-' in descriptor or 'es_' in descriptor or 'spanish' in descriptor:
                self.engine.setProperty('voice', voice.id)
                print(f"✓ Voz en español: {voice.name}")
                return

        print("⚠ No se encontró voz en español. Usando voz predeterminada.")

    def speak(self, text):
        """
        Encola un mensaje y arranca el hilo de síntesis si está parado.

        Args:
            text (str): Texto a sintetizar
        """
        if not self.config.voice_enabled or not self.engine:
            return

        with self._lock:
            self.message_queue.append(text)
            if self.is_speaking:
                return
            self.is_speaking = True

        thread = threading.Thread(target=self._process_queue, daemon=True)
        thread.start()

    def _process_queue(self):
        """Procesa la cola de mensajes uno por uno."""
        while True:
            with self._lock:
                if not self.message_queue:
                    self.is_speaking = False
                    return
                message = self.message_queue.popleft()
            try:
                self.engine.say(message)
                self.engine.runAndWait()
            except Exception as e:
                print(f"⚠ Error al reproducir voz: {e}")

    def speak_gesture(self, kind):
        """
        Anuncia un gesto del robot.

        Args:
            kind (GestureKind): Gesto aplicado; NONE y UNKNOWN no se anuncian
        """
        phrase = GESTURE_PHRASES.get(kind)
        if phrase:
            self.speak(phrase)
