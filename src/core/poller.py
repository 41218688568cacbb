"""
Loop de predicción por frame.

Este módulo contiene el planificador de frames, el token de cancelación y el
PredictionPoller, que en cada tick captura un frame, espera la inferencia del
modelo y reenvía el resultado a la interfaz.
"""

import asyncio


def report_task_error(task):
    """Done-callback: muestra la excepción de una tarea que nadie espera."""
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        print(f"❌ Error en tarea en segundo plano: {error!r}")


class CancellationToken:
    """Bandera cooperativa compartida entre stop() y la iteración en curso."""

    def __init__(self):
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


# ============================================================================
# CLASE: FrameScheduler
# Propósito: Equivalente de requestAnimationFrame sobre el event loop de asyncio
# ============================================================================
class FrameScheduler:
    """
    Programa callbacks para el siguiente frame del event loop.

    Args:
        interval (float): Segundos hasta el siguiente frame (0 = en cuanto sea posible)
    """

    def __init__(self, interval=0.0):
        self.interval = interval

    def request_frame(self, callback):
        """Programa callback y retorna un handle cancelable."""
        loop = asyncio.get_running_loop()
        if self.interval > 0:
            return loop.call_later(self.interval, callback)
        return loop.call_soon(callback)

    def cancel_frame(self, handle):
        if handle is not None:
            handle.cancel()


# ============================================================================
# CLASE: PredictionPoller
# Propósito: Loop cooperativo captura -> inferencia -> render
# Responsabilidades:
#   - Ejecutar una iteración por frame, nunca dos a la vez
#   - Descartar resultados de una iteración que termina después de stop()
#   - Reprogramarse solo mientras la sesión siga activa
# ============================================================================
class PredictionPoller:
    """
    Loop de predicción de un solo hilo lógico.

    Cada iteración:
        1. Refresca el buffer de la cámara (device.update())
        2. Espera estimate_pose() y predict() del modelo (único punto de suspensión)
        3. Si el token sigue vivo: reenvía predicciones y pose
        4. Si el token sigue vivo: se reprograma para el siguiente frame
    """

    def __init__(self, session, scheduler, on_predictions, on_pose=None, on_error=None):
        """
        Args:
            session (Session): Sesión con device y model ya asignados
            scheduler (FrameScheduler): Planificador de frames
            on_predictions (callable): Recibe la lista de Prediction del frame
            on_pose (callable): Recibe la Pose estimada (overlay de keypoints)
            on_error (callable): Recibe la excepción que terminó el loop
        """
        self.session = session
        self.scheduler = scheduler
        self.on_predictions = on_predictions
        self.on_pose = on_pose
        self.on_error = on_error
        self.token = None
        self.iterations = 0
        self._task = None

    def start(self):
        """Inicia el loop con un token nuevo y retorna el handle programado."""
        self.token = CancellationToken()
        return self._schedule(self.token)

    def stop(self):
        """Cancela el token y el siguiente frame programado."""
        if self.token is not None:
            self.token.cancel()
        self.scheduler.cancel_frame(self.session.loop_handle)

    def _schedule(self, token):
        handle = self.scheduler.request_frame(lambda: self._tick(token))
        self.session.loop_handle = handle
        return handle

    def _tick(self, token):
        if token.cancelled:
            return
        self._task = asyncio.ensure_future(self._step(token))
        self._task.add_done_callback(report_task_error)

    async def _step(self, token):
        session = self.session
        try:
            frame = session.device.update()
            pose, features = await session.model.estimate_pose(frame)
            predictions = await session.model.predict(features)
        except Exception as e:
            if token.cancelled:
                return
            token.cancel()
            print(f"❌ Error en el loop de predicción: {e}")
            if self.on_error:
                self.on_error(e)
            return

        # stop() pudo llegar mientras se esperaba la inferencia
        if token.cancelled:
            return

        self.iterations += 1
        self.on_predictions(predictions)
        if self.on_pose:
            self.on_pose(pose)

        if not token.cancelled:
            self._schedule(token)

    async def wait_idle(self):
        """Espera a que termine la iteración en curso (si la hay)."""
        if self._task is not None and not self._task.done():
            await asyncio.wait([self._task])
