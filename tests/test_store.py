import asyncio
import json
from pathlib import Path

import pytest

from shaken.errors import TemplateError
from shaken.store import ResponseStore


@pytest.mark.asyncio
async def test_set_persists_per_channel(tmp_path: Path) -> None:
    path = tmp_path / "commands.json"
    store = ResponseStore(path)

    await store.set("#a", "hi", "hello ${name}")
    await store.set("#b", "bye", "see you")

    assert json.loads(path.read_text(encoding="utf-8")) == {
        "#a": {"commands": {"hi": "hello ${name}"}},
        "#b": {"commands": {"bye": "see you"}},
    }
    assert store.contains("#a", "hi")
    assert not store.contains("#b", "hi")


@pytest.mark.asyncio
async def test_reload_from_disk(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "commands.json"
    await ResponseStore(path).set("#a", "hi", "hello")

    reloaded = ResponseStore(path)
    template = reloaded.get("#a", "hi")

    assert template is not None
    assert template.body == "hello"
    assert reloaded.commands("#a") == [("hi", "hello")]
    assert reloaded.commands("#missing") == []


@pytest.mark.asyncio
async def test_remove(tmp_path: Path) -> None:
    path = tmp_path / "commands.json"
    store = ResponseStore(path)
    await store.set("#a", "hi", "hello")

    assert await store.remove("#a", "hi") is True
    assert await store.remove("#a", "hi") is False
    assert await store.remove("#nope", "hi") is False
    assert ResponseStore(path).get("#a", "hi") is None


@pytest.mark.asyncio
async def test_invalid_body_is_not_stored(tmp_path: Path) -> None:
    path = tmp_path / "commands.json"
    store = ResponseStore(path)

    with pytest.raises(TemplateError):
        await store.set("#a", "hi", "${oops")

    assert store.commands("#a") == []
    assert not path.exists()


@pytest.mark.asyncio
async def test_concurrent_writes_keep_every_entry(tmp_path: Path) -> None:
    path = tmp_path / "commands.json"
    store = ResponseStore(path)

    await asyncio.gather(*(store.set("#a", f"cmd{index}", f"body {index}") for index in range(20)))

    saved = json.loads(path.read_text(encoding="utf-8"))
    assert saved["#a"]["commands"] == {f"cmd{index}": f"body {index}" for index in range(20)}


@pytest.mark.asyncio
async def test_writes_do_not_block_the_event_loop(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    store = ResponseStore(tmp_path / "commands.json")
    loop_threads: list[bool] = []
    write = store._sync

    def recording_sync() -> None:
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            loop_threads.append(False)
        else:
            loop_threads.append(True)
        write()

    monkeypatch.setattr(store, "_sync", recording_sync)

    await store.set("#a", "hi", "hello")
    await store.remove("#a", "hi")

    assert loop_threads == [False, False]


def test_unreadable_or_malformed_entries_are_skipped(tmp_path: Path) -> None:
    path = tmp_path / "commands.json"
    path.write_text(
        json.dumps(
            {
                "#a": {"commands": {"ok": "fine", "broken": "${oops", "number": 3}},
                "#b": "not a channel",
            }
        ),
        encoding="utf-8",
    )

    store = ResponseStore(path)

    assert store.commands("#a") == [("ok", "fine")]
    assert store.commands("#b") == []


def test_corrupt_file_starts_empty(tmp_path: Path) -> None:
    path = tmp_path / "commands.json"
    path.write_text("{not json", encoding="utf-8")

    assert ResponseStore(path).commands("#a") == []
