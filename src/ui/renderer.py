"""
Interfaz de usuario y renderizado.

Este módulo contiene la clase UIRenderer que dibuja la vista previa de la
cámara, el overlay de keypoints, el robot, los textos de estado y el botón.
"""

import cv2
import numpy as np

from core.types import StatusStyle

MARGIN = 20
HEADER_H = 50
ROBOT_PANEL_W = 340
FOOTER_H = 130

KEYPOINT_COLOR = (136, 255, 0)      # #00ff88 en BGR
KEYPOINT_RADIUS = 5
ROBOT_COLOR = (200, 200, 210)
ARM_COLOR = (180, 180, 190)
ARM_RAISED_COLOR = (0, 200, 255)

STATUS_COLORS = {
    StatusStyle.NEUTRAL: (200, 200, 200),
    StatusStyle.ACTIVE: (100, 255, 100),
    StatusStyle.ERROR: (80, 80, 255),
}


# ============================================================================
class UIRenderer:
    """
    Renderizador de la ventana del robot.

    Componentes visuales:
        1. Vista previa de la cámara (espejada) con keypoints encima
        2. Robot con brazos subidos/bajados según DisplayState
        3. Texto del gesto detectado
        4. Botón activar/detener cámara
        5. Texto de estado del sistema coloreado según su estilo
    """

    def __init__(self, config):
        """
        Args:
            config (RobotConfig): Define el tamaño de la vista previa y el umbral de keypoints
        """
        self.config = config
        self.preview_w = config.camera_width
        self.preview_h = config.camera_height
        self.width = MARGIN * 3 + self.preview_w + ROBOT_PANEL_W
        self.height = HEADER_H + self.preview_h + FOOTER_H

        self.preview_origin = (MARGIN, HEADER_H)
        self.robot_origin = (MARGIN * 2 + self.preview_w, HEADER_H)
        bx, by = self.robot_origin[0], HEADER_H + self.preview_h + 20
        self.button_rect = (bx, by, ROBOT_PANEL_W, 45)

    def hit_toggle(self, x, y):
        """True si el punto (x, y) cae dentro del botón."""
        bx, by, bw, bh = self.button_rect
        return bx <= x <= bx + bw and by <= y <= by + bh

    def draw(self, state, preview=None, fps=None):
        """
        Dibuja un frame completo de la ventana.

        Args:
            state (UiState): Estado visible actual
            preview (np.array): Último frame de la cámara o None
            fps (float): FPS de la ventana (opcional)

        Returns:
            np.array: Imagen BGR lista para cv2.imshow
        """
        img = np.full((self.height, self.width, 3), 30, dtype=np.uint8)

        cv2.putText(img, "ROBOT DE GESTOS", (MARGIN, 35),
                    cv2.FONT_HERSHEY_DUPLEX, 0.9, (255, 255, 255), 2)
        if fps is not None:
            cv2.putText(img, f"FPS: {int(fps)}", (self.width - 120, 35),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.6, (0, 255, 0), 2)

        self.draw_preview(img, preview)
        self.draw_keypoints(img, state.pose)
        self.draw_robot(img, state.display)
        self.draw_texts(img, state)
        self.draw_button(img, state.toggle)
        return img

    def draw_preview(self, img, preview):
        x, y = self.preview_origin
        if preview is None:
            cv2.rectangle(img, (x, y), (x + self.preview_w, y + self.preview_h), (50, 50, 50), -1)
            cv2.putText(img, "Camara apagada", (x + self.preview_w // 2 - 110, y + self.preview_h // 2),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.8, (150, 150, 150), 2)
        else:
            if preview.shape[1] != self.preview_w or preview.shape[0] != self.preview_h:
                preview = cv2.resize(preview, (self.preview_w, self.preview_h))
            img[y:y + self.preview_h, x:x + self.preview_w] = preview
        cv2.rectangle(img, (x, y), (x + self.preview_w, y + self.preview_h), (100, 100, 100), 2)

    def draw_keypoints(self, img, pose):
        """Dibuja los keypoints con score por encima del umbral."""
        if pose is None or not pose.keypoints:
            return

        ox, oy = self.preview_origin
        sx = self.preview_w / pose.width if pose.width else 1.0
        sy = self.preview_h / pose.height if pose.height else 1.0
        for keypoint in pose.keypoints:
            if keypoint.score > self.config.keypoint_threshold:
                center = (int(ox + keypoint.x_px * sx), int(oy + keypoint.y_px * sy))
                cv2.circle(img, center, KEYPOINT_RADIUS, KEYPOINT_COLOR, -1)

    def draw_robot(self, img, display):
        """
        Dibuja el robot de frente.

        El brazo izquierdo del robot se dibuja a la izquierda de la pantalla,
        igual que la vista previa espejada.
        """
        px, py = self.robot_origin
        cx = px + ROBOT_PANEL_W // 2
        cv2.rectangle(img, (px, py), (px + ROBOT_PANEL_W, py + self.preview_h), (45, 45, 45), -1)

        # Cabeza
        head_top = py + 50
        cv2.rectangle(img, (cx - 45, head_top), (cx + 45, head_top + 70), ROBOT_COLOR, -1)
        cv2.circle(img, (cx - 20, head_top + 30), 9, (60, 60, 60), -1)
        cv2.circle(img, (cx + 20, head_top + 30), 9, (60, 60, 60), -1)
        cv2.line(img, (cx, head_top), (cx, head_top - 20), ROBOT_COLOR, 3)
        cv2.circle(img, (cx, head_top - 24), 6, ARM_RAISED_COLOR, -1)

        # Cuerpo
        body_top = head_top + 80
        body_bottom = body_top + 120
        cv2.rectangle(img, (cx - 60, body_top), (cx + 60, body_bottom), ROBOT_COLOR, -1)
        cv2.rectangle(img, (cx - 25, body_top + 30), (cx + 25, body_top + 70), (90, 90, 90), -1)

        # Piernas
        cv2.rectangle(img, (cx - 45, body_bottom), (cx - 15, body_bottom + 60), ROBOT_COLOR, -1)
        cv2.rectangle(img, (cx + 15, body_bottom), (cx + 45, body_bottom + 60), ROBOT_COLOR, -1)

        self._draw_arm(img, cx - 60, body_top, -1, display.left_arm_raised)
        self._draw_arm(img, cx + 60, body_top, 1, display.right_arm_raised)

    def _draw_arm(self, img, shoulder_x, shoulder_y, side, raised):
        x0 = shoulder_x if side > 0 else shoulder_x - 25
        x1 = x0 + 25
        if raised:
            top, bottom = shoulder_y - 90, shoulder_y + 15
            color = ARM_RAISED_COLOR
        else:
            top, bottom = shoulder_y + 5, shoulder_y + 110
            color = ARM_COLOR
        cv2.rectangle(img, (x0, top), (x1, bottom), color, -1)
        hand_y = top if raised else bottom
        cv2.circle(img, ((x0 + x1) // 2, hand_y), 14, color, -1)

    def draw_texts(self, img, state):
        x = MARGIN
        y = HEADER_H + self.preview_h + 50
        cv2.putText(img, state.display.status_text, (x, y),
                    cv2.FONT_HERSHEY_DUPLEX, 1.1, (255, 255, 255), 2)

        color = STATUS_COLORS.get(state.status.style, STATUS_COLORS[StatusStyle.NEUTRAL])
        cv2.putText(img, state.status.text, (x, y + 40),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.65, color, 2)
        cv2.putText(img, "C/espacio: camara | v: voz | ESC/q: salir", (x, self.height - 12),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.5, (150, 150, 150), 1)

    def draw_button(self, img, toggle):
        bx, by, bw, bh = self.button_rect
        fill = (60, 60, 200) if toggle.active else (70, 130, 70)
        cv2.rectangle(img, (bx, by), (bx + bw, by + bh), fill, -1)
        cv2.rectangle(img, (bx, by), (bx + bw, by + bh), (255, 255, 255), 2)
        text_w = cv2.getTextSize(toggle.label, cv2.FONT_HERSHEY_SIMPLEX, 0.7, 2)[0][0]
        cv2.putText(img, toggle.label, (bx + (bw - text_w) // 2, by + 30),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.7, (255, 255, 255), 2)
