import numpy as np
import pytest

from camera.webcam import Webcam
from core.errors import DeviceAcquireError


class FakeCapture:
    def __init__(self, opened=True, frames=None, shape=(360, 480, 3)):
        self.opened = opened
        self.frames = frames
        self.shape = shape
        self.props = {}
        self.released = False

    def isOpened(self):
        return self.opened

    def set(self, prop, value):
        self.props[prop] = value
        return True

    def get(self, prop):
        return self.props.get(prop, 0)

    def read(self):
        if self.frames is not None:
            if not self.frames:
                return False, None
            return True, self.frames.pop(0)
        frame = np.zeros(self.shape, dtype=np.uint8)
        frame[0, 0] = 255
        return True, frame

    def release(self):
        self.released = True


def test_setup_and_mirrored_update():
    capture = FakeCapture()
    webcam = Webcam(480, 360, flip=True, capture_factory=lambda index: capture)
    webcam.setup()
    webcam.play()
    frame = webcam.update()

    assert frame.shape == (360, 480, 3)
    assert frame[0, 479].tolist() == [255, 255, 255]
    assert frame[0, 0].tolist() == [0, 0, 0]
    assert webcam.frame is frame


def test_update_resizes_to_requested_resolution():
    capture = FakeCapture(shape=(720, 1280, 3))
    webcam = Webcam(480, 360, flip=False, capture_factory=lambda index: capture)
    webcam.setup()
    assert webcam.update().shape == (360, 480, 3)


def test_setup_fails_when_camera_unavailable():
    capture = FakeCapture(opened=False)
    webcam = Webcam(480, 360, capture_factory=lambda index: capture)
    with pytest.raises(DeviceAcquireError):
        webcam.setup()
    assert capture.released


def test_play_fails_when_no_frames():
    webcam = Webcam(480, 360, capture_factory=lambda index: FakeCapture(frames=[]))
    webcam.setup()
    with pytest.raises(DeviceAcquireError):
        webcam.play()


def test_update_before_setup_raises():
    with pytest.raises(DeviceAcquireError):
        Webcam(480, 360).update()


def test_stop_releases_and_is_repeatable():
    capture = FakeCapture()
    webcam = Webcam(480, 360, capture_factory=lambda index: capture)
    webcam.setup()
    webcam.update()
    webcam.stop()
    webcam.stop()
    assert capture.released
    assert webcam.frame is None
    assert webcam.cap is None
