"""
Interfaz del modelo de postura.

El resto de la aplicación solo conoce estimate_pose() y predict(), de modo que
se puede cambiar de estimador o de clasificador sin tocar el loop.
"""

from abc import ABC, abstractmethod


class PoseModel(ABC):
    """
    Adaptador de modelo.

    Implementaciones reciben frames BGR (H, W, 3 uint8) y entregan:
        - estimate_pose(frame) -> (Pose | None, features | None)
        - predict(features) -> list[Prediction]
    Ambos métodos son corrutinas: la inferencia es el único punto donde el
    loop de predicción cede el control.
    """

    @property
    @abstractmethod
    def labels(self): ...

    @property
    def total_classes(self):
        return len(self.labels)

    @abstractmethod
    async def estimate_pose(self, frame): ...

    @abstractmethod
    async def predict(self, features): ...

    def close(self):
        pass
