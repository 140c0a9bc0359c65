"""Persistent per-channel custom response store."""

from __future__ import annotations

import asyncio
import json
import threading
from pathlib import Path

from loguru import logger

from shaken.errors import TemplateError
from shaken.template import SimpleTemplate


class ResponseStore:
    """Lock-guarded map of channel -> command name -> template.

    The whole store is rewritten as JSON after each change, shaped as
    ``{"#channel": {"commands": {"name": "body"}}}``. Writes run in a worker
    thread.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._lock = threading.Lock()
        self._write_lock = threading.Lock()
        self._channels: dict[str, dict[str, SimpleTemplate]] = self._load(path)

    @staticmethod
    def _load(path: Path) -> dict[str, dict[str, SimpleTemplate]]:
        if not path.exists():
            return {}
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            logger.exception("store.load.error path={}", path)
            return {}
        if not isinstance(payload, dict):
            return {}

        channels: dict[str, dict[str, SimpleTemplate]] = {}
        for channel, data in payload.items():
            commands = data.get("commands") if isinstance(data, dict) else None
            if not isinstance(commands, dict):
                continue
            templates: dict[str, SimpleTemplate] = {}
            for name, body in commands.items():
                if not isinstance(body, str):
                    continue
                try:
                    templates[name] = SimpleTemplate(name, body)
                except TemplateError as exc:
                    logger.warning("store.load.skip channel={} name={} error={}", channel, name, exc)
            channels[channel] = templates
        return channels

    def get(self, channel: str, name: str) -> SimpleTemplate | None:
        with self._lock:
            return self._channels.get(channel, {}).get(name)

    def contains(self, channel: str, name: str) -> bool:
        return self.get(channel, name) is not None

    def commands(self, channel: str) -> list[tuple[str, str]]:
        with self._lock:
            return [(name, template.body) for name, template in self._channels.get(channel, {}).items()]

    async def set(self, channel: str, name: str, body: str) -> None:
        template = SimpleTemplate(name, body)
        with self._lock:
            self._channels.setdefault(channel, {})[name] = template
        await asyncio.to_thread(self._sync)

    async def remove(self, channel: str, name: str) -> bool:
        with self._lock:
            commands = self._channels.get(channel)
            if commands is None or commands.pop(name, None) is None:
                return False
        await asyncio.to_thread(self._sync)
        return True

    def _sync(self) -> None:
        # Writers snapshot in turn, so the last write holds the newest state.
        with self._write_lock:
            with self._lock:
                payload = {
                    channel: {"commands": {name: template.body for name, template in commands.items()}}
                    for channel, commands in self._channels.items()
                }
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
