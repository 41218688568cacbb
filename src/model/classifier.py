"""
Clasificador denso sobre numpy para modelos exportados en formato layers-model.

Teachable Machine exporta el clasificador de posturas como model.json
(topología Keras + manifiesto de pesos) y uno o más archivos binarios con los
pesos float32. Este módulo reconstruye las capas densas y ejecuta el forward.
"""

import numpy as np

from core.errors import ModelLoadError
from core.types import Prediction


def _softmax(x):
    shifted = x - np.max(x)
    exp = np.exp(shifted)
    return exp / np.sum(exp)


ACTIVATIONS = {
    'linear': lambda x: x,
    'relu': lambda x: np.maximum(x, 0.0),
    'sigmoid': lambda x: 1.0 / (1.0 + np.exp(-x)),
    'tanh': np.tanh,
    'softmax': _softmax,
}

# Capas sin efecto en inferencia
PASSTHROUGH_LAYERS = {'Dropout', 'Flatten', 'InputLayer'}


class DenseLayer:
    def __init__(self, kernel, bias=None, activation='linear'):
        if activation not in ACTIVATIONS:
            raise ModelLoadError(f"activación no soportada: {activation}")
        self.kernel = np.asarray(kernel, dtype=np.float32)
        self.bias = None if bias is None else np.asarray(bias, dtype=np.float32)
        self.activation = activation

    def forward(self, x):
        y = x @ self.kernel
        if self.bias is not None:
            y = y + self.bias
        return ACTIVATIONS[self.activation](y)


# ============================================================================
class DenseClassifier:
    """
    Pila de capas densas con una etiqueta por neurona de salida.

    Args:
        layers (list[DenseLayer]): Capas en orden de ejecución
        labels (list[str]): Nombres de clase (metadata.json)
    """

    def __init__(self, layers, labels):
        if not layers:
            raise ModelLoadError("el modelo no contiene capas densas")
        self.layers = layers
        self.labels = list(labels)
        if self.layers[-1].kernel.shape[1] != len(self.labels):
            raise ModelLoadError(
                f"el modelo tiene {self.layers[-1].kernel.shape[1]} salidas "
                f"pero metadata.json declara {len(self.labels)} clases"
            )

    @property
    def input_size(self):
        return int(self.layers[0].kernel.shape[0])

    def predict_proba(self, features):
        x = np.asarray(features, dtype=np.float32).reshape(-1)
        if x.shape[0] != self.input_size:
            raise ValueError(f"se esperaban {self.input_size} features, llegaron {x.shape[0]}")
        for layer in self.layers:
            x = layer.forward(x)
        return x

    def predict(self, features):
        """
        Clasifica un vector de features.

        Returns:
            list[Prediction]: Una entrada por clase, en el orden de metadata.json
        """
        probabilities = self.predict_proba(features)
        return [
            Prediction(label, float(prob))
            for label, prob in zip(self.labels, probabilities)
        ]

    @classmethod
    def from_layers_model(cls, model_json, weight_data, labels):
        """
        Construye el clasificador desde un layers-model.

        Args:
            model_json (dict): Contenido de model.json
            weight_data (bytes): Shards de pesos concatenados en orden del manifiesto
            labels (list[str]): Etiquetas de clase

        Raises:
            ModelLoadError: Si la topología o los pesos no se pueden interpretar
        """
        layer_configs = _layer_configs(model_json)
        weights = _decode_weights(weight_manifest_specs(model_json), weight_data)

        layers = []
        for layer_cfg in layer_configs:
            class_name = layer_cfg.get('class_name')
            config = layer_cfg.get('config', {})
            if class_name == 'Dense':
                if not weights:
                    raise ModelLoadError("faltan pesos para una capa Dense")
                kernel = weights.pop(0)
                bias = None
                if config.get('use_bias', True):
                    if not weights:
                        raise ModelLoadError("falta el bias de una capa Dense")
                    bias = weights.pop(0)
                if kernel.ndim != 2 or kernel.shape[1] != config.get('units', kernel.shape[1]):
                    raise ModelLoadError(f"forma de kernel inesperada: {kernel.shape}")
                layers.append(DenseLayer(kernel, bias, config.get('activation', 'linear')))
            elif class_name == 'Activation':
                if not layers:
                    raise ModelLoadError("capa Activation antes de cualquier capa Dense")
                previous = layers[-1]
                if previous.activation != 'linear':
                    raise ModelLoadError("dos activaciones consecutivas no están soportadas")
                layers[-1] = DenseLayer(previous.kernel, previous.bias, config.get('activation', 'linear'))
            elif class_name in PASSTHROUGH_LAYERS:
                continue
            else:
                raise ModelLoadError(f"capa no soportada: {class_name}")

        if weights:
            raise ModelLoadError(f"sobran {len(weights)} tensores de pesos sin capa")
        return cls(layers, labels)


def _layer_configs(model_json):
    topology = model_json.get('modelTopology')
    if not isinstance(topology, dict):
        raise ModelLoadError("model.json no contiene modelTopology")

    # tfjs guarda la topología directamente o envuelta en model_config
    topology = topology.get('model_config', topology)
    config = topology.get('config')
    if isinstance(config, dict):
        config = config.get('layers')
    if not isinstance(config, list):
        raise ModelLoadError("modelTopology no describe una lista de capas")
    return config


def weight_manifest_specs(model_json):
    """
    Lista las especificaciones de pesos y los archivos que las contienen.

    Returns:
        list[dict]: Especificaciones (name, shape, dtype) en orden del manifiesto
    """
    manifest = model_json.get('weightsManifest')
    if not isinstance(manifest, list):
        raise ModelLoadError("model.json no contiene weightsManifest")
    specs = []
    for group in manifest:
        specs.extend(group.get('weights', []))
    return specs


def weight_paths(model_json):
    manifest = model_json.get('weightsManifest') or []
    return [path for group in manifest for path in group.get('paths', [])]


def _decode_weights(specs, weight_data):
    arrays = []
    offset = 0
    for spec in specs:
        if spec.get('dtype', 'float32') != 'float32' or 'quantization' in spec:
            raise ModelLoadError(f"tipo de peso no soportado en {spec.get('name')}")
        shape = tuple(spec.get('shape', ()))
        count = int(np.prod(shape)) if shape else 1
        end = offset + count * 4
        if end > len(weight_data):
            raise ModelLoadError("los archivos de pesos están incompletos")
        arrays.append(np.frombuffer(weight_data, dtype='<f4', count=count, offset=offset).reshape(shape))
        offset = end
    return arrays
