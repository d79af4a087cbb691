import json
import logging

from fakes import preserved_root_logging
from scriptwatch.logging_utils import JSONFormatter, configure_logging, log_event


def _ours(root):
    return [h for h in root.handlers if getattr(h, "_added_by_configure_logging", False)]


def test_configure_logging_is_idempotent(tmp_path):
    log_file = tmp_path / "sw.log"
    with preserved_root_logging() as root:
        configure_logging(True, str(log_file), log_json=True)
        assert len(_ours(root)) == 3
        assert root.level == logging.DEBUG
        configure_logging(False)
        assert len(_ours(root)) == 1
        assert root.level == logging.WARNING
        configure_logging(True, log_level="error")
        assert root.level == logging.ERROR


def test_configured_levels_do_not_outlive_the_test(caplog):
    with preserved_root_logging():
        configure_logging(False, log_level="error")
    logging.getLogger("scriptwatch.options").warning("still captured")
    assert "still captured" in caplog.text


def test_json_formatter_includes_event_fields():
    record = logging.LogRecord("scriptwatch", logging.INFO, __file__, 1, "update_notify", None, None)
    record.event = "update_notify"
    record.count = 2
    record.kind = "list"
    payload = json.loads(JSONFormatter().format(record))
    assert payload == {
        "level": "INFO",
        "message": "update_notify",
        "event": "update_notify",
        "count": 2,
        "kind": "list",
    }


def test_log_event_attaches_fields(caplog):
    caplog.set_level(logging.DEBUG, logger="scriptwatch")
    log_event("update_check_result", item_id=3, succeeded=True)
    [record] = [r for r in caplog.records if r.getMessage() == "update_check_result"]
    assert record.item_id == 3 and record.succeeded is True


def test_log_event_never_raises():
    # "msg" collides with a LogRecord attribute and makes logging raise
    log_event("bad", msg="clash")
