"""
Configuración del robot controlado por postura.

Este módulo contiene la configuración centralizada: ubicación del modelo,
parámetros de cámara, umbrales de confianza y preferencias de voz.
"""

import os

DEFAULT_MODEL_URL = 'https://teachablemachine.withgoogle.com/models/XKSVVEz4G/'
MODEL_URL_ENV = 'ROBOT_MODEL_URL'     # Sustituye la URL por defecto (http(s):// o file://)


# ============================================================================
# CLASE: RobotConfig
# Propósito: Configuración del sistema de control por postura
# Responsabilidades:
#   - Indicar dónde se encuentra el modelo de postura entrenado
#   - Fijar resolución y modo espejo de la cámara
#   - Definir umbrales de predicción y de dibujo de keypoints
#   - Almacenar preferencias de voz
# ============================================================================
class RobotConfig:
    """
    Configuración del robot de gestos.

    Opciones disponibles:
        - Modelo: URL base con model.json y metadata.json
        - Cámara: índice, resolución fija y modo espejo
        - Umbrales: confianza mínima de la clase y de cada keypoint
        - Voz: anuncio de gestos (volumen, velocidad)
    """

    def __init__(self, model_url=None, camera_index=0):
        """
        Inicializa configuración con valores por defecto.

        Args:
            model_url (str): URL base del modelo. Por defecto ROBOT_MODEL_URL
                o DEFAULT_MODEL_URL
            camera_index (int): Índice de la cámara (0 = predeterminada)
        """
        # ====================================================================
        # MODELO DE POSTURA
        # ====================================================================
        if model_url is None:
            model_url = os.environ.get(MODEL_URL_ENV) or DEFAULT_MODEL_URL
        if not model_url.endswith('/'):
            model_url += '/'
        self.model_url = model_url

        # ====================================================================
        # CÁMARA
        # ====================================================================
        self.camera_index = camera_index
        self.camera_width = 480             # Resolución fija del feed
        self.camera_height = 360
        self.mirror = True                  # Modo espejo

        # ====================================================================
        # UMBRALES
        # ====================================================================
        self.prediction_threshold = 0.5     # La clase ganadora debe superarlo
        self.keypoint_threshold = 0.5       # Keypoints dibujados en el overlay

        # ====================================================================
        # INTERFAZ
        # ====================================================================
        self.window_name = 'Robot de Gestos'
        self.ui_fps = 30                    # Frecuencia del loop de ventana y predicción

        # ====================================================================
        # VOZ
        # ====================================================================
        self.voice_enabled = True
        self.voice_volume = 0.8             # Volumen (0.0-1.0)
        self.voice_rate = 150               # Palabras por minuto

    def model_json_url(self):
        """Retorna la URL de la topología y manifiesto de pesos."""
        return self.model_url + 'model.json'

    def metadata_url(self):
        """Retorna la URL de los metadatos (etiquetas de clase)."""
        return self.model_url + 'metadata.json'

    def frame_interval(self):
        """
        Calcula el intervalo entre frames.

        Returns:
            float: Segundos entre dos ticks del loop
        """
        return 1.0 / self.ui_fps if self.ui_fps > 0 else 0.0
