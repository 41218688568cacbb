"""
Webcam con resolución fija y modo espejo sobre OpenCV.
"""

import cv2

from core.errors import DeviceAcquireError


# ============================================================================
class Webcam:
    """
    Dispositivo de captura.

    Uso:
        webcam = Webcam(480, 360, flip=True)
        webcam.setup()      # Abre la cámara (DeviceAcquireError si falla)
        webcam.play()       # Verifica que entregue frames
        frame = webcam.update()
        webcam.stop()

    El último frame capturado queda en webcam.frame (vista previa).
    """

    def __init__(self, width, height, flip=True, index=0, capture_factory=None):
        """
        Args:
            width (int): Ancho solicitado en píxeles
            height (int): Alto solicitado en píxeles
            flip (bool): Espejar horizontalmente cada frame
            index (int): Índice de la cámara
            capture_factory (callable): Constructor de captura (por defecto cv2.VideoCapture)
        """
        self.width = width
        self.height = height
        self.flip = flip
        self.index = index
        self.capture_factory = capture_factory or cv2.VideoCapture
        self.cap = None
        self.frame = None

    def setup(self):
        """Abre la cámara y fija resolución y buffer mínimo."""
        cap = self.capture_factory(self.index)
        if cap is None or not cap.isOpened():
            if cap is not None:
                cap.release()
            raise DeviceAcquireError(f"no se pudo abrir la cámara {self.index}")

        cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.width)
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.height)
        cap.set(cv2.CAP_PROP_BUFFERSIZE, 1)  # Menor latencia
        self.cap = cap

        # Dimensiones reales (pueden diferir de las solicitadas)
        real_w = int(cap.get(cv2.CAP_PROP_FRAME_WIDTH))
        real_h = int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
        print(f"OK Camara: {real_w}x{real_h}")

    def play(self):
        """Lee un primer frame; falla si la cámara abre pero no entrega imagen."""
        self.update()

    def update(self):
        """
        Captura un frame nuevo.

        Returns:
            np.array: Frame BGR redimensionado y espejado

        Raises:
            DeviceAcquireError: Si la cámara no está abierta o la lectura falla
        """
        if self.cap is None:
            raise DeviceAcquireError("la cámara no está abierta")

        ok, frame = self.cap.read()
        if not ok or frame is None:
            raise DeviceAcquireError("no se pudo leer un frame de la cámara")

        if frame.shape[1] != self.width or frame.shape[0] != self.height:
            frame = cv2.resize(frame, (self.width, self.height))
        if self.flip:
            frame = cv2.flip(frame, 1)

        self.frame = frame
        return frame

    def stop(self):
        """Libera la cámara. Seguro de llamar varias veces."""
        if self.cap is not None:
            self.cap.release()
            self.cap = None
        self.frame = None
