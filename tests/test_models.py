"""
Tests for models module.
"""

import pytest

from jenkins_trigger.core.exceptions import JenkinsAPIError, JenkinsDecodeError
from jenkins_trigger.models.queue import Executable, QueueItem


class TestQueueItem:
    """Tests for QueueItem parsing."""

    def test_still_queued(self):
        item = QueueItem.from_dict({"why": "waiting", "executable": None})

        assert item.why == "waiting"
        assert item.executable is None
        assert not item.is_resolved

    def test_resolved(self):
        item = QueueItem.from_dict(
            {"why": None, "executable": {"number": 107, "url": "https://ci.example/job/smoke-test/107/"}}
        )

        assert item.is_resolved
        assert item.executable == Executable(107, "https://ci.example/job/smoke-test/107/")

    def test_missing_keys_treated_as_null(self):
        """Test that Jenkins' extra fields are ignored and absent keys mean null."""
        item = QueueItem.from_dict({"_class": "hudson.model.Queue$WaitingItem", "id": 42})

        assert item == QueueItem()

    @pytest.mark.parametrize(
        "payload",
        [
            [],
            "queued",
            {"why": 3},
            {"executable": "build"},
            {"executable": {"number": "107", "url": "u"}},
            {"executable": {"number": True, "url": "u"}},
            {"executable": {"number": 107}},
        ],
    )
    def test_bad_shape_raises_decode_error(self, payload):
        with pytest.raises(JenkinsDecodeError):
            QueueItem.from_dict(payload, source="https://ci.example/queue/item/1/api/json")

    def test_decode_error_is_api_error(self):
        """Decode errors are folded into the API error category."""
        with pytest.raises(JenkinsAPIError) as exc_info:
            QueueItem.from_dict(None, source="https://ci.example/queue/item/1/api/json")

        assert exc_info.value.url == "https://ci.example/queue/item/1/api/json"

    def test_frozen(self):
        executable = Executable(1, "https://ci.example/job/a/1/")

        with pytest.raises(AttributeError):
            executable.number = 2
