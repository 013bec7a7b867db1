#!/usr/bin/env python3
"""applife host simulator: main entry point.

Plays the part of the host environment: builds an application controller,
drives it through one of the guide's scenarios on an asyncio loop, and
logs every lifecycle event observers receive. Background work runs in
worker threads and reports back through the budgeter.
"""

import argparse
import asyncio
import signal
import sys
import os
import logging
import time

# Add src/ to path so imports work when running directly
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from config import load_config
from core.logging_config import setup_logging
from lifecycle import events
from lifecycle.application import ApplicationController
from lifecycle.screen import ScreenController
from player.music_player import MusicPlayerApp, PlayerScreen
from player.state import Library, Playback

log = logging.getLogger("applife.main")

SCENARIOS = ("cold-launch", "interruption", "background-expiry", "music-player")


class HostSimulator:
    """Drives lifecycle controllers the way a host environment would."""

    def __init__(self, config: dict):
        self.config = config
        self._budget = config.get("background", {}).get("budget_seconds", 30.0)
        demo = config.get("demo", {})
        self._upload_s = demo.get("upload_seconds", 2.0)
        self._expiry_budget = demo.get("expiry_budget_seconds", 1.0)
        self.app = ApplicationController("app", background_budget_s=self._budget)
        self.timeline: list[str] = []
        self.hooks: list = []  # observers are held weakly by the controllers
        self._watch(self.app, events.APPLICATION_EVENTS)

    def _watch(self, controller, names) -> None:
        for name in names:
            controller.on(name, self._record)

    def _record(self, data: dict) -> None:
        source = data.get("screen") or data.get("source", "?")
        entry = f"{source}:{data['event']}"
        self.timeline.append(entry)
        log.info("%-14s %-20s -> %s", source, data["event"], data["state"].name)

    def new_screen(self, screen_id: str) -> ScreenController:
        screen = ScreenController(self.app, screen_id)
        self._watch(screen, events.SCREEN_EVENTS)
        return screen

    # --- Scenarios ---

    async def cold_launch(self) -> None:
        self.app.launch()

    async def interruption(self) -> None:
        self.app.launch()
        log.info("Phone call comes in")
        self.app.resign_active()
        self.app.enter_background()
        await asyncio.sleep(0.1)
        log.info("User returns to the app")
        self.app.become_active()

    async def background_expiry(self) -> None:
        self.app.launch()
        self.app.resign_active()
        self.app.enter_background()

        expired = asyncio.Event()
        loop = asyncio.get_running_loop()
        self.app.background.begin(
            self._expiry_budget,
            on_expire=lambda: loop.call_soon_threadsafe(expired.set))
        log.info("Waiting %.1fs for the background budget to run out",
                 self._expiry_budget)
        await asyncio.wait_for(expired.wait(), self._expiry_budget + 5.0)
        self.app.suspend()

    async def music_player(self) -> None:
        library = Library(["Favourites", "Road trip"])
        playback = Playback()
        loop = asyncio.get_running_loop()
        upload_s = self._upload_s

        def upload(items: list[str]) -> None:
            time.sleep(upload_s)
            log.info("Uploaded %s", ", ".join(items))

        player = MusicPlayerApp(
            self.app, library, playback,
            uploader=upload,
            spawn=lambda work: loop.run_in_executor(None, work))
        self.hooks.append(player)

        log.info("User taps the app icon")
        self.app.launch()
        now_playing = self.new_screen("now-playing")
        screen = PlayerScreen(now_playing, playback, library, "Song A")
        self.hooks.append(screen)
        now_playing.load()
        now_playing.will_appear()
        now_playing.did_appear()
        playback.position = 42.0

        log.info("Phone call comes in")
        self.app.resign_active()
        self.app.enter_background()
        if player.upload_job is not None:
            await player.upload_job
        self.app.suspend()

        log.info("User returns to the app")
        self.app.wake()
        self.app.become_active()

        log.info("User switches songs")
        next_up = self.new_screen("next-song")
        next_screen = PlayerScreen(next_up, playback, library, "Song B")
        self.hooks.append(next_screen)
        now_playing.will_disappear()
        next_up.load()
        next_up.will_appear()
        now_playing.did_disappear()
        next_up.did_appear()
        now_playing.destroy()

        log.info("User force-quits the app")
        self.app.terminate()
        next_up.destroy()
        log.info("Saves: %s", library.saves)
        log.info("Uploaded: %s", library.uploaded)

    async def run(self, scenario: str) -> list[str]:
        """Run one scenario and return the recorded event timeline."""
        handler = getattr(self, scenario.replace("-", "_"))
        log.info("=== Scenario: %s ===", scenario)
        try:
            await handler()
        except asyncio.CancelledError:
            log.info("Scenario cancelled")
        finally:
            self.shutdown()
        return self.timeline

    def shutdown(self) -> None:
        """Clean shutdown."""
        self.app.destroy()
        log.info("Final state: %s", self.app.state.name)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="applife",
                                     description="Application lifecycle host simulator")
    parser.add_argument("--scenario", choices=SCENARIOS, default="music-player")
    parser.add_argument("--config", default=None, help="path to a YAML config file")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging()
    config = load_config(args.config)
    setup_logging(config["logging"]["level"])
    log.info("=== applife host simulator ===")

    sim = HostSimulator(config)

    loop = asyncio.new_event_loop()
    task = loop.create_task(sim.run(args.scenario))

    def signal_handler():
        log.info("Signal received, stopping...")
        task.cancel()

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, signal_handler)

    try:
        timeline = loop.run_until_complete(task)
        log.info("Events: %s", " ".join(timeline))
    finally:
        loop.close()


if __name__ == "__main__":
    main()
