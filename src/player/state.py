"""Music player state used by the example lifecycle wiring.

Stands in for the real persistence, playback and network layers: every
call is recorded so a host simulation (or a test) can see what the
lifecycle hooks did and in which order.
"""

import logging
import threading

log = logging.getLogger("applife.player.state")


class Library:
    """Thread-safe in-memory store of playlists and saved positions."""

    def __init__(self, playlists: list[str] | None = None):
        self._lock = threading.Lock()
        self.playlists: list[str] = list(playlists or ["Favourites"])
        self.saved_positions: dict[str, float] = {}
        self.saves: list[str] = []
        self.uploaded: list[str] = []
        self.pending_upload: list[str] = []

    def save(self, what: str) -> None:
        with self._lock:
            self.saves.append(what)
        log.debug("Saved %s", what)

    def save_position(self, song: str, position: float) -> None:
        with self._lock:
            self.saved_positions[song] = position
            self.pending_upload.append(song)
            self.saves.append(f"position:{song}")

    def take_pending(self) -> list[str]:
        with self._lock:
            items, self.pending_upload = self.pending_upload, []
            return items

    def mark_uploaded(self, items: list[str]) -> None:
        with self._lock:
            self.uploaded.extend(items)

    def requeue(self, items: list[str]) -> None:
        """Put items back after a failed or expired upload."""
        with self._lock:
            self.pending_upload = list(items) + self.pending_upload


class Playback:
    """Playback, progress timer and animation flags for the player."""

    def __init__(self):
        self.song: str | None = None
        self.position = 0.0
        self.playing = False
        self.was_playing = False
        self.timer_running = False
        self.animating = False
        self.controls_ready = False
        self.actions: list[str] = []

    def _record(self, action: str) -> None:
        self.actions.append(action)
        log.debug("Playback: %s", action)

    def play(self, song: str | None = None) -> None:
        if song is not None and song != self.song:
            self.song = song
            self.position = 0.0
        self.playing = True
        self._record(f"play:{self.song}")

    def pause(self) -> None:
        self.was_playing = self.playing
        self.playing = False
        self._record("pause")

    def start_timer(self) -> None:
        self.timer_running = True
        self._record("start_timer")

    def stop_timer(self) -> None:
        self.timer_running = False
        self._record("stop_timer")

    def start_animations(self) -> None:
        self.animating = True
        self._record("start_animations")

    def stop_animations(self) -> None:
        self.animating = False
        self._record("stop_animations")
