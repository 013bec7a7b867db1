"""Music player: reference wiring of the lifecycle hooks.

Shows where each kind of work belongs:
  - critical saves in willResignActive / didEnterBackground, never only
    in willTerminate
  - pending uploads inside a budgeted background task
  - timers and animations started from didAppear, never willAppear
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable

from core.errors import LifecycleError
from lifecycle.application import ApplicationController
from lifecycle.background import BackgroundTask
from lifecycle.hooks import AppHooks, ScreenHooks
from lifecycle.screen import ScreenController
from lifecycle.states import ApplicationState
from player.state import Library, Playback

log = logging.getLogger("applife.player.music_player")


def _spawn_thread(work: Callable[[], None]) -> Any:
    thread = threading.Thread(target=work, name="upload", daemon=True)
    thread.start()
    return thread


def _no_upload(items: list[str]) -> None:
    log.debug("Upload of %d items skipped (no uploader)", len(items))


class MusicPlayerApp(AppHooks):
    """Application-level hooks of the music player."""

    def __init__(self, app: ApplicationController, library: Library,
                 playback: Playback, *,
                 uploader: Callable[[list[str]], None] = _no_upload,
                 spawn: Callable[[Callable[[], None]], Any] = _spawn_thread,
                 upload_budget_s: float | None = None):
        super().__init__()
        self.app = app
        self.library = library
        self.playback = playback
        self._uploader = uploader
        self._spawn = spawn
        self._upload_budget_s = upload_budget_s
        self.loaded_playlists: list[str] = []
        self.upload_task: BackgroundTask | None = None
        self.upload_job: Any = None
        self.upload_failures = 0
        self.expired_uploads = 0
        self.foreground_refreshes = 0
        self.bind(app)

    def on_did_finish_launching(self, data: dict) -> None:
        # Keep launch light: only read what the first screen needs
        self.loaded_playlists = list(self.library.playlists)
        log.info("Loaded %d playlists", len(self.loaded_playlists))

    def on_did_become_active(self, data: dict) -> None:
        if self.playback.was_playing and not self.playback.playing:
            self.playback.play()
            self.playback.was_playing = False
            log.info("Resumed %s", self.playback.song)

    def on_will_resign_active(self, data: dict) -> None:
        if self.playback.playing:
            self.playback.pause()
        self.library.save("user_data")

    def on_did_enter_background(self, data: dict) -> None:
        if self.playback.song is not None:
            self.library.save_position(self.playback.song, self.playback.position)
        self.library.save("all_data")
        self._start_upload()

    def on_will_enter_foreground(self, data: dict) -> None:
        self.foreground_refreshes += 1
        log.info("Refreshing after background (%d)", self.foreground_refreshes)

    def on_will_terminate(self, data: dict) -> None:
        self.library.save("playlists")
        if self.playback.song is not None:
            self.library.save_position(self.playback.song, self.playback.position)

    # --- Background upload ---

    def _start_upload(self) -> None:
        if self.app.background.has_outstanding:
            # Picked up by the running upload once it finishes
            log.info("Upload deferred, background task %d still running",
                     self.app.background.outstanding.task_id)
            return
        items = self.library.take_pending()
        if not items:
            return

        def expired() -> None:
            self.expired_uploads += 1
            self.library.requeue(items)
            log.warning("Upload of %d items ran out of background time", len(items))

        try:
            task = self.app.background.begin(self._upload_budget_s, on_expire=expired)
        except LifecycleError:
            self.library.requeue(items)
            raise
        self.upload_task = task

        def work() -> None:
            try:
                self._uploader(items)
            except Exception as exc:
                self.upload_failures += 1
                ok = False
                log.warning("Upload failed: %s", exc)
            else:
                ok = True

            # Settled under the controller lock so expiry cannot interleave
            with self.app.lock:
                if task.expired:
                    # expired() has requeued the items
                    log.info("Upload finished after background task %d expired",
                             task.task_id)
                    return
                if ok:
                    self.library.mark_uploaded(items)
                else:
                    self.library.requeue(items)
                if not task.finished:
                    self.app.background.complete(task)
                # Data saved while this upload ran goes out in a new task
                if ok and self.app.state is ApplicationState.BACKGROUND:
                    self._start_upload()

        self.upload_job = self._spawn(work)


class PlayerScreen(ScreenHooks):
    """Now-playing screen hooks."""

    def __init__(self, controller: ScreenController, playback: Playback,
                 library: Library, song: str):
        super().__init__()
        self.controller = controller
        self.playback = playback
        self.library = library
        self.song = song
        self.data_refreshes = 0
        self.observers_removed = False
        self.bind(controller)

    def on_load(self, data: dict) -> None:
        self.playback.controls_ready = True

    def on_will_appear(self, data: dict) -> None:
        # Surface not ready yet: refresh data only
        self.data_refreshes += 1

    def on_did_appear(self, data: dict) -> None:
        self.playback.start_animations()
        self.playback.start_timer()
        if self.playback.song != self.song or not self.playback.playing:
            self.playback.play(self.song)

    def on_will_disappear(self, data: dict) -> None:
        self.library.save_position(self.song, self.playback.position)
        self.playback.stop_timer()

    def on_did_disappear(self, data: dict) -> None:
        self.playback.stop_animations()

    def on_destroy(self, data: dict) -> None:
        self.observers_removed = True
        self.unbind()
