from __future__ import annotations

import logging

import numpy as np
import pygame

from . import config
from .events import Event, EventBus

log = logging.getLogger(__name__)

SHAPES = ("square", "sine", "triangle")


def synth_tone(
    freq: float,
    ms: float,
    volume: float = config.VOLUME,
    shape: str = "square",
    sample_rate: int = config.SAMPLE_RATE,
) -> np.ndarray:
    """Mono 16-bit samples for one enveloped oscillator tone."""
    if shape not in SHAPES:
        raise ValueError(f"unknown wave shape: {shape!r}")
    n = max(1, int(sample_rate * ms / 1000.0))
    phase = (freq * np.arange(n) / sample_rate) % 1.0
    if shape == "square":
        wave = np.where(phase < 0.5, 1.0, -1.0)
    elif shape == "triangle":
        wave = 4.0 * np.abs(phase - 0.5) - 1.0
    else:
        wave = np.sin(2.0 * np.pi * phase)

    env = np.ones(n)
    attack = max(1, int(n * 0.02))
    release = max(1, int(n * 0.08))
    env[:attack] = np.linspace(0.0, 1.0, attack, endpoint=False)
    env[n - release :] = np.linspace(1.0, 0.0, release)

    amp = 32767 * max(0.0, min(1.0, volume))
    return (wave * env * amp).astype(np.int16)


def synth_sequence(parts: list[tuple[float, float]], volume: float, shape: str) -> np.ndarray:
    return np.concatenate([synth_tone(freq, ms, volume, shape) for freq, ms in parts])


class ToneSequencer:
    """Cycles through a list of notes on its own clock.

    `update()` returns the indices of the notes that became due, so the
    caller decides how to voice them.
    """

    def __init__(self, notes, step_ms: float = config.MUSIC_STEP_MS):
        if not notes:
            raise ValueError("sequencer needs at least one note")
        self.notes = list(notes)
        self.step_ms = step_ms
        self.position = 0
        self.elapsed_ms = 0.0
        self.running = False

    def start(self, rewind: bool = False) -> None:
        if rewind:
            self.position = 0
        self.running = True
        # First note sounds on the next update.
        self.elapsed_ms = self.step_ms

    def stop(self) -> None:
        self.running = False
        self.elapsed_ms = 0.0

    def update(self, dt_ms: float) -> list[int]:
        if not self.running:
            return []
        self.elapsed_ms += dt_ms
        due = []
        while self.elapsed_ms >= self.step_ms:
            self.elapsed_ms -= self.step_ms
            due.append(self.position)
            self.position = (self.position + 1) % len(self.notes)
        return due


class AudioPlayer:
    """Plays sound effects and background music in response to game events."""

    def __init__(self, events: EventBus, enabled: bool = True):
        self.events = events
        self.enabled = enabled
        self.sequencer = ToneSequencer(config.MUSIC_NOTES)
        self.sounds: dict[str, pygame.mixer.Sound] = {}
        self.music: list[pygame.mixer.Sound] = []
        if self.enabled:
            try:
                pygame.mixer.init(frequency=config.SAMPLE_RATE, size=-16, channels=1)
                self._build_sounds()
            except pygame.error as e:
                log.warning("audio disabled: %s", e)
                self.enabled = False

        self._handlers = {
            Event.FOOD_EATEN: self.on_food_eaten,
            Event.GAME_OVER: self.on_game_over,
            Event.BOARD_FULL: self.on_board_full,
            Event.PAUSED: self.on_paused,
            Event.RESUMED: self.on_resumed,
            Event.RESET: self.on_reset,
        }
        for event, handler in self._handlers.items():
            events.subscribe(event, handler)

    def _make_sound(self, samples: np.ndarray) -> pygame.mixer.Sound:
        _, _, channels = pygame.mixer.get_init()
        if channels > 1:
            samples = np.repeat(samples[:, None], channels, axis=1)
        return pygame.sndarray.make_sound(np.ascontiguousarray(samples))

    def _build_sounds(self) -> None:
        self.sounds["eat"] = self._make_sound(
            synth_sequence([(660.0, 50), (990.0, 70)], config.VOLUME, "square")
        )
        self.sounds["game_over"] = self._make_sound(
            synth_sequence([(392.0, 140), (311.13, 140), (233.08, 320)], config.VOLUME, "triangle")
        )
        self.sounds["board_full"] = self._make_sound(
            synth_sequence([(523.25, 110), (659.25, 110), (783.99, 110), (1046.5, 300)], config.VOLUME, "square")
        )
        self.music = [
            self._make_sound(synth_tone(freq, config.MUSIC_STEP_MS * 0.9, config.MUSIC_VOLUME, "triangle"))
            for freq in config.MUSIC_NOTES
        ]

    def play(self, name: str) -> None:
        if self.enabled:
            self.sounds[name].play()

    def start(self) -> None:
        self.sequencer.start(rewind=True)

    def update(self, dt_ms: float) -> None:
        for index in self.sequencer.update(dt_ms):
            if self.enabled:
                self.music[index].play()

    def on_food_eaten(self, state) -> None:
        self.play("eat")

    def on_game_over(self, state) -> None:
        self.sequencer.stop()
        if not state.won:
            self.play("game_over")

    def on_board_full(self, state) -> None:
        self.play("board_full")

    def on_paused(self, state) -> None:
        self.sequencer.stop()

    def on_resumed(self, state) -> None:
        self.sequencer.start()

    def on_reset(self, state) -> None:
        self.sequencer.start(rewind=True)

    def close(self) -> None:
        for event, handler in self._handlers.items():
            self.events.unsubscribe(event, handler)
        if self.enabled:
            pygame.mixer.quit()
            self.enabled = False
