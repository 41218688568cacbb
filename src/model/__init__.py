"""
Módulo del modelo de postura.
Contiene la interfaz del modelo, el clasificador denso y el cargador remoto.
"""

from .base import PoseModel
from .classifier import DenseClassifier
from .teachable import TeachablePoseModel, load_pose_model

__all__ = ['DenseClassifier', 'PoseModel', 'TeachablePoseModel', 'load_pose_model']
