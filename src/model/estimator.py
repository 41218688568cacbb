"""
Estimador de pose con MediaPipe.

Este módulo convierte un frame BGR en keypoints (para el overlay) y en el
vector de features que consume el clasificador.
"""

import cv2
import mediapipe as mp
import numpy as np

from core.types import Keypoint, Pose

NUM_LANDMARKS = 33
FEATURE_SIZE = NUM_LANDMARKS * 3   # x, y normalizados + visibilidad


# ============================================================================
class MediaPipePoseEstimator:
    """
    Estimador de cuerpo completo con MediaPipe Pose.

    Configuración:
        - static_image_mode=False: Optimizado para video (tracking entre frames)
        - model_complexity=1: Equilibrio entre precisión y rendimiento
    """

    feature_size = FEATURE_SIZE

    def __init__(self, detection_confidence=0.5, tracking_confidence=0.5, model_complexity=1):
        self.mp_pose = mp.solutions.pose
        self.pose = self.mp_pose.Pose(
            static_image_mode=False,
            model_complexity=model_complexity,
            enable_segmentation=False,
            smooth_landmarks=True,
            min_detection_confidence=detection_confidence,
            min_tracking_confidence=tracking_confidence,
        )

    def estimate(self, frame):
        """
        Estima la pose de un frame.

        Args:
            frame (np.array): Imagen BGR (ya espejada)

        Returns:
            tuple: (Pose, features) o (None, None) si no hay persona visible
        """
        img_rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        img_rgb.flags.writeable = False
        results = self.pose.process(img_rgb)

        if not results.pose_landmarks:
            return None, None

        h, w = frame.shape[:2]
        keypoints = []
        features = []
        for idx, lm in enumerate(results.pose_landmarks.landmark):
            name = self.mp_pose.PoseLandmark(idx).name.lower()
            score = float(getattr(lm, 'visibility', 0.0) or 0.0)
            keypoints.append(Keypoint(name, lm.x * w, lm.y * h, score))
            features.extend((lm.x, lm.y, score))

        return Pose(w, h, keypoints), np.asarray(features, dtype=np.float32)

    def close(self):
        self.pose.close()
