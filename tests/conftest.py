import asyncio

import numpy as np
import pytest

from config.settings import RobotConfig
from core.errors import DeviceAcquireError
from core.poller import FrameScheduler
from core.session import CameraSessionManager
from core.types import Keypoint, Pose, Prediction, UiState


def preds(*pairs):
    return [Prediction(name, prob) for name, prob in pairs]


class FakeDevice:
    def __init__(self, fail_setup=False, fail_after=None):
        self.fail_setup = fail_setup
        self.fail_after = fail_after
        self.frame = None
        self.updates = 0
        self.stopped = False

    def setup(self):
        if self.fail_setup:
            raise DeviceAcquireError("permission denied")

    def play(self):
        pass

    def update(self):
        if self.fail_after is not None and self.updates >= self.fail_after:
            raise DeviceAcquireError("read failed")
        self.updates += 1
        self.frame = np.zeros((4, 4, 3), dtype=np.uint8)
        return self.frame

    def stop(self):
        self.stopped = True
        self.frame = None


class FakeModel:
    """Modelo instantáneo que devuelve siempre las mismas predicciones."""

    def __init__(self, predictions=None):
        self.predictions = predictions if predictions is not None else preds(("Derecha", 0.82))
        self.labels = [p.class_name for p in self.predictions]
        self.total_classes = len(self.labels)
        self.estimates = 0
        self.in_flight = 0
        self.max_in_flight = 0
        self.closed = False

    async def estimate_pose(self, frame):
        self.estimates += 1
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        await asyncio.sleep(0)
        pose = Pose(4, 4, [Keypoint("nose", 1.0, 1.0, 0.9)])
        return pose, np.zeros(3, dtype=np.float32)

    async def predict(self, features):
        self.in_flight -= 1
        return list(self.predictions)

    def close(self):
        self.closed = True


class BlockingModel(FakeModel):
    """La primera inferencia espera hasta release.set()."""

    def __init__(self, predictions=None):
        super().__init__(predictions)
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def estimate_pose(self, frame):
        self.estimates += 1
        self.started.set()
        await self.release.wait()
        return Pose(4, 4, []), np.zeros(3, dtype=np.float32)

    async def predict(self, features):
        return list(self.predictions)


class CountingLoader:
    def __init__(self, model=None, error=None):
        self.model = model
        self.error = error
        self.calls = []

    def __call__(self, model_url, metadata_url):
        self.calls.append((model_url, metadata_url))
        if self.error is not None:
            raise self.error
        return self.model


def make_manager(model=None, device=None, loader=None, on_gesture=None):
    config = RobotConfig()
    ui = UiState()
    loader = loader or CountingLoader(model or FakeModel())
    device = device or FakeDevice()
    manager = CameraSessionManager(
        config, ui, loader, lambda w, h, flip, index: device, FrameScheduler(0.0),
        on_gesture=on_gesture,
    )
    return manager, ui, loader, device


async def spin(n=10):
    for _ in range(n):
        await asyncio.sleep(0)


@pytest.fixture
def config():
    return RobotConfig()
