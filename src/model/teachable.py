"""
Modelo de postura estilo Teachable Machine.

Este módulo descarga model.json, los pesos y metadata.json desde la URL del
modelo, y combina el estimador de pose con el clasificador denso.
"""

import asyncio
import json
import urllib.error
import urllib.parse
import urllib.request

from core.errors import ModelLoadError
from model.base import PoseModel
from model.classifier import DenseClassifier, weight_paths

FETCH_TIMEOUT = 15  # Segundos por archivo


def fetch_bytes(url, timeout=FETCH_TIMEOUT):
    """
    Descarga un recurso (http(s):// o file://).

    Raises:
        ModelLoadError: Si el recurso no es accesible
    """
    try:
        with urllib.request.urlopen(url, timeout=timeout) as response:
            return response.read()
    except (urllib.error.URLError, OSError, ValueError) as e:
        raise ModelLoadError(f"no se pudo descargar {url}: {e}") from e


def fetch_json(url, fetch=fetch_bytes):
    try:
        return json.loads(fetch(url))
    except (ValueError, UnicodeDecodeError) as e:
        raise ModelLoadError(f"JSON inválido en {url}: {e}") from e


# ============================================================================
class TeachablePoseModel(PoseModel):
    """
    Estimador de pose + clasificador de posturas.

    Args:
        estimator: Objeto con estimate(frame) -> (Pose, features) y close()
        classifier (DenseClassifier): Clasificador ya cargado
    """

    def __init__(self, estimator, classifier):
        self.estimator = estimator
        self.classifier = classifier

    @property
    def labels(self):
        return self.classifier.labels

    async def estimate_pose(self, frame):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.estimator.estimate, frame)

    async def predict(self, features):
        # Sin persona visible no hay clasificación
        if features is None:
            return []
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.classifier.predict, features)

    def close(self):
        self.estimator.close()


def load_classifier(model_url, metadata_url, fetch=fetch_bytes):
    """
    Descarga y construye el clasificador.

    Args:
        model_url (str): URL de model.json
        metadata_url (str): URL de metadata.json
        fetch (callable): url -> bytes

    Returns:
        DenseClassifier
    """
    model_json = fetch_json(model_url, fetch)
    metadata = fetch_json(metadata_url, fetch)
    if not isinstance(model_json, dict) or not isinstance(metadata, dict):
        raise ModelLoadError("model.json y metadata.json deben ser objetos JSON")

    labels = metadata.get('labels')
    if not isinstance(labels, list) or not labels:
        raise ModelLoadError("metadata.json no declara etiquetas")

    try:
        # Los shards se resuelven relativos a model.json
        paths = weight_paths(model_json)
        weight_data = b''.join(fetch(urllib.parse.urljoin(model_url, path)) for path in paths)
        return DenseClassifier.from_layers_model(model_json, weight_data, [str(label) for label in labels])
    except (AttributeError, TypeError, KeyError, ValueError) as e:
        raise ModelLoadError(f"estructura de model.json no válida: {e}") from e


def load_pose_model(model_url, metadata_url, estimator_factory=None, fetch=fetch_bytes):
    """
    Carga el modelo completo (operación bloqueante).

    Args:
        model_url (str): URL de model.json
        metadata_url (str): URL de metadata.json
        estimator_factory (callable): Crea el estimador (por defecto MediaPipe Pose)
        fetch (callable): url -> bytes

    Returns:
        TeachablePoseModel

    Raises:
        ModelLoadError: Descarga fallida, formato inválido o features incompatibles
    """
    classifier = load_classifier(model_url, metadata_url, fetch)

    try:
        if estimator_factory is None:
            from model.estimator import MediaPipePoseEstimator
            estimator_factory = MediaPipePoseEstimator
        estimator = estimator_factory()
    except Exception as e:
        raise ModelLoadError(f"no se pudo inicializar el estimador de pose: {e}") from e

    if classifier.input_size != estimator.feature_size:
        estimator.close()
        raise ModelLoadError(
            f"el clasificador espera {classifier.input_size} features "
            f"y el estimador produce {estimator.feature_size}"
        )
    return TeachablePoseModel(estimator, classifier)
