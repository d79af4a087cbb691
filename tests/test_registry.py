import json

import pytest

from fakes import FakeTransport, make_script, metablock
from scriptwatch.i18n import Localizer
from scriptwatch.registry import MemoryRegistry
from scriptwatch.updatesets.types import MalformedContentError, ScriptConfig, UpdateProgress

LIB = "https://cdn.example.com/lib.js"
CSS = "https://cdn.example.com/style.css"


def test_from_file_accepts_list_and_wrapped_object(tmp_path):
    entries = [
        {"id": 1, "meta": {"name": "A", "version": "1.0", "downloadURL": "https://a"}},
        {"props": {"id": 2}, "meta": {"name": "B"}, "config": {"shouldUpdate": False}},
    ]
    listed = tmp_path / "list.json"
    listed.write_text(json.dumps(entries), encoding="utf-8")
    wrapped = tmp_path / "wrapped.json"
    wrapped.write_text(json.dumps({"scripts": entries}), encoding="utf-8")

    for path in (listed, wrapped):
        reg = MemoryRegistry.from_file(path)
        assert [i.id for i in reg.list_items()] == [1, 2]
        assert reg.get_item(1).meta.download_url == "https://a"
        assert reg.get_item(2).should_auto_check is False


def test_from_file_rejects_other_shapes(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text('{"nope": 1}', encoding="utf-8")
    with pytest.raises(ValueError):
        MemoryRegistry.from_file(path)
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        MemoryRegistry.from_file(path)
    with pytest.raises(OSError):
        MemoryRegistry.from_file(tmp_path / "missing.json")


def test_get_item_accepts_numeric_strings():
    reg = MemoryRegistry([make_script(5)])
    assert reg.get_item("5") is reg.get_item(5)
    assert reg.get_item("x") is None


@pytest.mark.asyncio
async def test_parse_and_store_replaces_meta_and_code():
    reg = MemoryRegistry([make_script(1, "1.0", custom_name="Mine")])
    code = metablock("2.0", name="Renamed") + "run();\n"
    updated = await reg.parse_and_store(code, item_id=1, progress=UpdateProgress())
    assert updated.meta.name == "Renamed"
    assert updated.custom.name == "Mine"
    assert reg.get_item(1).code == code


@pytest.mark.asyncio
async def test_parse_and_store_rejects_code_without_metadata():
    reg = MemoryRegistry([make_script(1)])
    with pytest.raises(MalformedContentError) as exc:
        await reg.parse_and_store(
            "alert(1)", item_id=1, progress=UpdateProgress(message="Updating...")
        )
    assert exc.value.progress.message == "Updating..."
    assert exc.value.progress.error
    assert reg.get_item(1).current_version == "1.0"


@pytest.mark.asyncio
async def test_refresh_resources_downloads_requires_and_resources():
    item = make_script(1, require=[LIB])
    item.meta.resources = {"css": CSS}
    transport = FakeTransport({LIB: (200, "lib"), CSS: (200, "body{}")})
    reg = MemoryRegistry([item], transport=transport)
    assert await reg.refresh_resources(item, {"Cache-Control": "no-cache"}) is None
    assert transport.urls() == [LIB, CSS]
    assert reg.resource_cache == {LIB: "lib", CSS: "body{}"}
    assert all(h == {"Cache-Control": "no-cache"} for _, h in transport.calls)


@pytest.mark.asyncio
async def test_refresh_resources_reports_first_failure_and_keeps_going():
    item = make_script(1, require=[LIB, CSS])
    transport = FakeTransport({CSS: (200, "ok")})
    reg = MemoryRegistry(
        [item], transport=transport, localizer=Localizer({"genericError": "Fehler"})
    )
    assert await reg.refresh_resources(item, {}) == f"Fehler 404, {LIB}"
    assert reg.resource_cache == {CSS: "ok"}


@pytest.mark.asyncio
async def test_refresh_without_transport_is_a_no_op():
    reg = MemoryRegistry([make_script(1, require=[LIB])])
    assert await reg.refresh_resources(reg.get_item(1), {}) is None


def test_config_flags_read_string_booleans():
    cfg = ScriptConfig.from_dict({"shouldUpdate": "false", "notifyUpdates": "False"})
    assert cfg.should_update is False and cfg.notify_updates is False
    cfg = ScriptConfig.from_dict({"should_update": "yes", "notify_updates": 1})
    assert cfg.should_update is True and cfg.notify_updates is True
    cfg = ScriptConfig.from_dict({"shouldUpdate": "maybe", "notifyUpdates": "maybe"})
    assert cfg.should_update is True and cfg.notify_updates is None
