import time
from types import SimpleNamespace

import pytest

import voice.feedback as feedback
from config.settings import RobotConfig
from core.types import GestureKind


class FakeEngine:
    def __init__(self, voices=()):
        self.properties = {'voices': list(voices)}
        self.said = []

    def setProperty(self, name, value):
        self.properties[name] = value

    def getProperty(self, name):
        return self.properties.get(name)

    def say(self, text):
        self.said.append(text)

    def runAndWait(self):
        pass


def wait_idle(voice, timeout=2.0):
    deadline = time.time() + timeout
    while voice.is_speaking and time.time() < deadline:
        time.sleep(0.01)


@pytest.fixture
def engine(monkeypatch):
    spanish = SimpleNamespace(id="com.voice.es-MX.paulina", name="Paulina", languages=[])
    engine = FakeEngine([SimpleNamespace(id="en-US", name="Alex", languages=[]), spanish])
    monkeypatch.setattr(feedback.pyttsx3, "init", lambda: engine)
    return engine


def test_configures_spanish_voice(engine):
    config = RobotConfig()
    feedback.VoiceFeedback(config)
    assert engine.properties['voice'] == "com.voice.es-MX.paulina"
    assert engine.properties['volume'] == config.voice_volume
    assert engine.properties['rate'] == config.voice_rate


def test_speak_gesture_phrases(engine):
    voice = feedback.VoiceFeedback(RobotConfig())
    voice.speak_gesture(GestureKind.RAISE_RIGHT)
    wait_idle(voice)
    voice.speak_gesture(GestureKind.UNKNOWN)
    voice.speak_gesture(GestureKind.NONE)
    voice.speak_gesture(GestureKind.RAISE_BOTH)
    wait_idle(voice)
    assert engine.said == ["brazo derecho", "ambos brazos"]


def test_disabled_voice_is_silent(engine):
    config = RobotConfig()
    config.voice_enabled = False
    voice = feedback.VoiceFeedback(config)
    voice.speak("hola")
    assert not voice.is_speaking
    assert engine.said == []


def test_init_failure_disables_voice(monkeypatch):
    def broken():
        raise RuntimeError("no audio driver")

    monkeypatch.setattr(feedback.pyttsx3, "init", broken)
    config = RobotConfig()
    voice = feedback.VoiceFeedback(config)
    assert voice.engine is None
    assert config.voice_enabled is False
    voice.speak("hola")
