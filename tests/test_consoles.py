import logging

from fakes import make_script
from scriptwatch.consoles import ConsoleNavigator, ConsoleNotifier, ConsoleProgressListener
from scriptwatch.i18n import Localizer
from scriptwatch.updatesets.sources import display_name
from scriptwatch.updatesets.types import Notification, NotificationEntry, UpdateProgress


def test_localizer_formats_and_falls_back():
    t = Localizer().translate
    assert t("msgScriptUpdated", ["Foo"]) == "Script [Foo] is updated!"
    assert t("msgNoUpdate") == "No update found."
    assert t("notAKey") == "notAKey"
    assert Localizer({"msgScriptUpdated": "{0} {1}"}).translate("msgScriptUpdated", ["x"]) == "{0} {1}"


def test_display_name_falls_back_to_id():
    assert display_name(make_script(3, custom_name="Mine")) == "Mine"
    assert display_name(make_script(3)) == "Example"
    assert display_name(make_script(3, name="")) == "#3"


def test_console_notifier_prints_list_and_clicks(monkeypatch, capsys):
    monkeypatch.setenv("NO_COLOR", "1")
    clicked = []
    notifier = ConsoleNotifier(click=True)
    notifier.notify(
        Notification(
            text="Update",
            type="list",
            items=[NotificationEntry("Alpha", "line one\nline two")],
            on_click=lambda: clicked.append(True),
        )
    )
    out = capsys.readouterr().out.splitlines()
    assert out[0].endswith("Update")
    assert out[1] == "  Alpha  line one"
    assert out[2] == "         line two"
    assert clicked == [True]
    assert len(notifier.shown) == 1


def test_console_notifier_without_click(capsys):
    clicked = []
    ConsoleNotifier().notify(Notification(text="hi", on_click=lambda: clicked.append(1)))
    assert "hi" in capsys.readouterr().out
    assert clicked == []


def test_console_navigator(monkeypatch, capsys):
    monkeypatch.setenv("NO_COLOR", "1")
    nav = ConsoleNavigator()
    nav.open_editor(4)
    nav.open_settings()
    out = capsys.readouterr().out
    assert "script #4" in out and "settings" in out


def test_progress_listener_logs_and_echoes(caplog, capsys, monkeypatch):
    monkeypatch.setenv("NO_COLOR", "1")
    caplog.set_level(logging.DEBUG, logger="scriptwatch")
    listener = ConsoleProgressListener(echo=True)
    listener(2, UpdateProgress("Error fetching script!", False, "Error 500, https://x"))
    [record] = [r for r in caplog.records if r.getMessage() == "update_progress"]
    assert record.item_id == 2 and record.checking is False
    assert "#2: Error fetching script! (Error 500, https://x)" in capsys.readouterr().out
