"""
Aplicación principal que integra todos los componentes.

Este módulo contiene la clase RobotGestureApp.
"""

import asyncio
import time

import cv2

from camera.webcam import Webcam
from config.settings import MODEL_URL_ENV, RobotConfig
from core.poller import FrameScheduler, report_task_error
from core.session import CameraSessionManager
from core.types import GestureKind, UiState
from model.teachable import load_pose_model
from ui.renderer import UIRenderer
from voice.feedback import VoiceFeedback

KEY_ESC = 27


# ============================================================================
class RobotGestureApp:
    """
    Aplicación del robot controlado por postura.

    Arquitectura:
        - CameraSessionManager: Cámara + modelo + loop de predicción
        - UIRenderer: Ventana OpenCV (vista previa, robot, estado, botón)
        - VoiceFeedback: Anuncio por voz de los gestos
        - RobotGestureApp: Coordinador y loop de ventana

    Todo corre en un único event loop de asyncio: el loop de ventana cede el
    control entre frames y el loop de predicción se programa por frame.
    """

    def __init__(self, config=None, model_loader=load_pose_model, camera_factory=Webcam):
        """
        Args:
            config (RobotConfig): Configuración (opcional)
            model_loader (callable): Cargador del modelo de postura
            camera_factory (callable): Constructor de la webcam
        """
        self.config = config if config else RobotConfig()
        self.state = UiState()
        self.ui = UIRenderer(self.config)
        self.voice = VoiceFeedback(self.config)
        self.manager = CameraSessionManager(
            self.config, self.state, model_loader, camera_factory,
            FrameScheduler(self.config.frame_interval()),
            on_gesture=self.on_gesture,
            on_stop=self.on_session_stopped,
        )

        self.running = False
        self.last_kind = GestureKind.NONE
        self._toggle_requested = False
        self._toggle_task = None

        # Variables de FPS
        self.fps_time = time.time()
        self.fps = 0

    def on_gesture(self, cmd):
        """Anuncia por voz solo los cambios de gesto."""
        if cmd.kind is not self.last_kind:
            self.last_kind = cmd.kind
            self.voice.speak_gesture(cmd.kind)

    def on_session_stopped(self):
        # Tras reactivar la cámara el primer gesto se vuelve a anunciar
        self.last_kind = GestureKind.NONE

    def request_toggle(self):
        self._toggle_requested = True

    def _on_mouse(self, event, x, y, flags, param):
        if event == cv2.EVENT_LBUTTONDOWN and self.ui.hit_toggle(x, y):
            self.request_toggle()

    def handle_key(self, key):
        """
        Procesa una tecla.

        Controles:
            - 'c' o espacio: Activar/detener cámara
            - 'v': Activar/desactivar voz
            - ESC o 'q': Salir
        """
        if key in (KEY_ESC, ord('q')):
            self.running = False
        elif key in (ord('c'), ord(' ')):
            self.request_toggle()
        elif key == ord('v'):
            self.config.voice_enabled = not self.config.voice_enabled
            status = "ACTIVADA" if self.config.voice_enabled else "DESACTIVADA"
            print(f"🔊 Voz: {status}")

    def _dispatch_toggle(self):
        # Un solo toggle en vuelo; los clics durante la activación se ignoran
        if not self._toggle_requested:
            return
        self._toggle_requested = False
        if self._toggle_task is not None and not self._toggle_task.done():
            return
        self._toggle_task = asyncio.ensure_future(self.manager.toggle())
        self._toggle_task.add_done_callback(report_task_error)

    def print_banner(self):
        print("\n" + "=" * 70)
        print("🤖 SISTEMA DE CONTROL POR POSTURA")
        print("=" * 70)
        print(f"🔗 Modelo: {self.config.model_url}")
        print(f"   (cámbialo con la variable de entorno {MODEL_URL_ENV})")
        print("\nEl robot detectará tus posturas corporales:")
        print("   • Brazo derecho levantado -> Robot levanta brazo derecho")
        print("   • Brazo izquierdo levantado -> Robot levanta brazo izquierdo")
        print("   • Ambos brazos levantados -> Robot levanta ambos brazos")
        print("   • Postura indeterminada -> Muestra estado")
        print("\nPresiona 'c' o haz clic en el botón para activar la cámara")
        print("Presiona 'v' para activar/desactivar voz")
        print("Presiona ESC o 'q' para salir")
        print("=" * 70 + "\n")

    async def run_async(self):
        """
        Bucle de ventana.

        Ciclo de ejecución:
            1. Dibujar estado actual (vista previa, keypoints, robot, textos)
            2. Mostrar frame y procesar teclado/ratón
            3. Lanzar toggle pendiente
            4. Ceder el control al loop de predicción hasta el siguiente frame
        """
        self.print_banner()
        cv2.namedWindow(self.config.window_name)
        cv2.setMouseCallback(self.config.window_name, self._on_mouse)

        self.running = True
        interval = self.config.frame_interval()
        try:
            while self.running:
                current_time = time.time()
                self.fps = 1 / (current_time - self.fps_time + 1e-6)
                self.fps_time = current_time

                frame = self.ui.draw(self.state, self.manager.preview_frame(), self.fps)
                cv2.imshow(self.config.window_name, frame)

                key = cv2.waitKey(1) & 0xFF
                self.handle_key(key)
                self._dispatch_toggle()

                await asyncio.sleep(interval)
        finally:
            if self._toggle_task is not None and not self._toggle_task.done():
                await asyncio.wait([self._toggle_task])
            await self.manager.close()
            cv2.destroyAllWindows()
            print("\nOK Aplicacion cerrada correctamente")

    def run(self):
        asyncio.run(self.run_async())
