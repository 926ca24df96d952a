import json
import logging
import os
import sys

sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from infrastructure.logging import JsonFormatter


def test_json_formatter_includes_extra_fields():
    record = logging.makeLogRecord(
        {
            "name": "application.controllers.session_controller",
            "levelname": "WARNING",
            "msg": "Export failed: %s",
            "args": ("timeout",),
            "event": "export_failed",
            "locations": ["Wakad"],
        }
    )

    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "Export failed: timeout"
    assert payload["level"] == "WARNING"
    assert payload["event"] == "export_failed"
    assert payload["locations"] == ["Wakad"]
    assert "args" not in payload
