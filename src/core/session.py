"""
Ciclo de vida de la cámara y del modelo de postura.

Este módulo contiene la sesión (estado compartido) y el CameraSessionManager,
que la activa y desactiva desde el botón de la interfaz.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Optional

from config.settings import MODEL_URL_ENV
from core.errors import DeviceAcquireError, ModelLoadError
from core.gesture_renderer import render_gesture, reset_display
from core.interpreter import interpret
from core.poller import PredictionPoller
from core.types import StatusStyle

STATUS_STARTING = "Starting system..."
STATUS_LOADING = "Loading pose model..."
STATUS_ACTIVE = "System active - move your body"
STATUS_STOPPED = "System stopped"
STATUS_MODEL_ERROR = "Error: pose model unavailable"
STATUS_CAMERA_ERROR = "Error: could not access camera"
STATUS_LOOP_ERROR = "Error: camera feed interrupted"

LABEL_ACTIVATE = "Activate camera"
LABEL_STOP = "Stop camera"


@dataclass
class Session:
    """
    Estado de la sesión de cámara.

    Invariante: device y loop_handle están asignados si y solo si active.
    model se carga una vez y se conserva entre ciclos stop/start.
    """
    active: bool = False
    model: Optional[Any] = None
    device: Optional[Any] = None
    loop_handle: Optional[Any] = None


# ============================================================================
# CLASE: CameraSessionManager
# Propósito: Activar y desactivar cámara + modelo + loop de predicción
# Responsabilidades:
#   - Cargar el modelo de forma perezosa (una sola vez)
#   - Adquirir y liberar la cámara
#   - Arrancar y cancelar el PredictionPoller
#   - Reflejar el estado en el botón y en el texto de estado
# ============================================================================
class CameraSessionManager:
    """
    Gestor de la sesión de cámara.

    Las operaciones bloqueantes (carga del modelo, apertura de la cámara) se
    ejecutan en el executor del event loop; el hilo lógico sigue siendo uno.
    """

    def __init__(self, config, ui_state, model_loader, camera_factory, scheduler,
                 on_gesture=None, on_stop=None):
        """
        Args:
            config (RobotConfig): Configuración del sistema
            ui_state (UiState): Estado visible que se actualiza
            model_loader (callable): (model_url, metadata_url) -> PoseModel
            camera_factory (callable): (width, height, flip, index) -> Webcam
            scheduler (FrameScheduler): Planificador de frames del poller
            on_gesture (callable): Recibe cada GestureCommand aplicado
            on_stop (callable): Se llama cada vez que la sesión se desactiva
        """
        self.config = config
        self.ui = ui_state
        self.model_loader = model_loader
        self.camera_factory = camera_factory
        self.scheduler = scheduler
        self.on_gesture = on_gesture
        self.on_stop = on_stop
        self.session = Session()
        self.poller = None
        self._stopped_poller = None
        self._starting = False

    @property
    def active(self):
        return self.session.active

    def _set_status(self, text, style=StatusStyle.NEUTRAL):
        self.ui.status.text = text
        self.ui.status.style = style

    async def _run_blocking(self, func, *args):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, func, *args)

    async def load_model(self):
        """
        Carga el modelo si aún no existe.

        Returns:
            bool: True si hay modelo disponible, False si la carga falló
        """
        if self.session.model is not None:
            return True

        print("📦 Cargando modelo de postura...")
        self._set_status(STATUS_LOADING)
        try:
            model = await self._run_blocking(
                self.model_loader, self.config.model_json_url(), self.config.metadata_url()
            )
        except ModelLoadError as e:
            print(f"❌ Error al cargar el modelo de postura: {e}")
            print(f"   Indica otro modelo con la variable de entorno {MODEL_URL_ENV}")
            self._set_status(STATUS_MODEL_ERROR, StatusStyle.ERROR)
            return False

        self.session.model = model
        print("✓ Modelo de postura cargado correctamente")
        print(f"📊 Clases de postura detectables: {model.total_classes}")
        return True

    async def start(self):
        """
        Activa la sesión: modelo, cámara y loop de predicción.

        No hace nada si la sesión ya está activa o arrancando. Ante un error
        de modelo o cámara la sesión queda inactiva y el estado muestra el error.
        """
        if self.session.active or self._starting:
            return
        self._starting = True
        try:
            self._set_status(STATUS_STARTING)
            # La inferencia del poller anterior sigue usando el modelo
            if self._stopped_poller is not None:
                await self._stopped_poller.wait_idle()
                self._stopped_poller = None
            if not await self.load_model():
                return

            device = self.camera_factory(
                self.config.camera_width, self.config.camera_height,
                self.config.mirror, self.config.camera_index
            )
            try:
                await self._run_blocking(device.setup)
                await self._run_blocking(device.play)
            except DeviceAcquireError as e:
                device.stop()
                print(f"❌ Error al iniciar la cámara: {e}")
                self._set_status(STATUS_CAMERA_ERROR, StatusStyle.ERROR)
                return

            self.session.device = device
            self.session.active = True
            self.ui.toggle.label = LABEL_STOP
            self.ui.toggle.active = True
            self._set_status(STATUS_ACTIVE, StatusStyle.ACTIVE)
            print("✓ Cámara iniciada correctamente")

            self.poller = PredictionPoller(
                self.session, self.scheduler,
                on_predictions=self._apply_predictions,
                on_pose=self._apply_pose,
                on_error=self._on_loop_error,
            )
            self.poller.start()
        finally:
            self._starting = False

    def stop(self, status=STATUS_STOPPED, style=StatusStyle.NEUTRAL):
        """Desactiva la sesión. Seguro de llamar aunque no esté activa."""
        if not self.session.active:
            return

        if self.poller is not None:
            self.poller.stop()
            self._stopped_poller = self.poller
            self.poller = None
        if self.session.device is not None:
            self.session.device.stop()

        self.session.device = None
        self.session.loop_handle = None
        self.session.active = False

        self.ui.toggle.label = LABEL_ACTIVATE
        self.ui.toggle.active = False
        self._set_status(status, style)
        reset_display(self.ui.display)
        self.ui.pose = None
        print("⏹ Sistema detenido")
        if self.on_stop:
            self.on_stop()

    async def toggle(self):
        if self.session.active:
            self.stop()
        else:
            await self.start()

    async def close(self):
        """Detiene la sesión y libera el modelo (cierre de la aplicación)."""
        self.stop()
        # La inferencia en vuelo todavía usa el modelo
        if self._stopped_poller is not None:
            await self._stopped_poller.wait_idle()
            self._stopped_poller = None
        if self.session.model is not None:
            self.session.model.close()
            self.session.model = None

    def preview_frame(self):
        """Último frame capturado, o None si la cámara no está activa."""
        if self.session.device is None:
            return None
        return self.session.device.frame

    # ========================================================================
    # CALLBACKS DEL POLLER
    # ========================================================================
    def _apply_predictions(self, predictions):
        cmd = interpret(predictions, self.config.prediction_threshold)
        render_gesture(cmd, self.ui.display)
        if self.on_gesture:
            self.on_gesture(cmd)

    def _apply_pose(self, pose):
        self.ui.pose = pose

    def _on_loop_error(self, error):
        self.stop(STATUS_LOOP_ERROR, StatusStyle.ERROR)
