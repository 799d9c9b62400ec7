from solmint.core.logs import LogBuffer


def test_log_buffer_redacts_base58() -> None:
    buffer = LogBuffer()
    entry = buffer.record("token", "Token created: VkgXGe7czUXXcWzeWgt6H9VxLJhqioU5AnqRC1Ry2GK")
    assert "VkgX…y2GK" in entry.message
    assert "VkgXGe7czUXXcWzeWgt6H9VxLJhqioU5AnqRC1Ry2GK" not in entry.message


def test_log_buffer_redaction_can_be_disabled() -> None:
    buffer = LogBuffer(redaction_enabled=False)
    entry = buffer.record("token", "Token created: VkgXGe7czUXXcWzeWgt6H9VxLJhqioU5AnqRC1Ry2GK")
    assert entry.message.endswith("VkgXGe7czUXXcWzeWgt6H9VxLJhqioU5AnqRC1Ry2GK")


def test_log_buffer_recent_filters_and_limits() -> None:
    buffer = LogBuffer(max_entries=5)
    buffer.record("token", "t1")
    buffer.record("metadata", "m1")
    buffer.record("token", "t2")
    buffer.record("network", "n1")
    recent_token = buffer.recent(category="token", limit=5)
    assert [entry.message for entry in recent_token] == ["t1", "t2"]
    assert [entry.message for entry in buffer.recent(limit=2)] == ["t2", "n1"]
    latest = buffer.latest()
    assert latest is not None and latest.message == "n1"


def test_log_buffer_drops_oldest() -> None:
    buffer = LogBuffer(max_entries=2)
    for index in range(3):
        buffer.record("system", f"e{index}")
    assert [entry.message for entry in buffer.recent()] == ["e1", "e2"]


def test_log_buffer_normalizes_invalid_inputs() -> None:
    buffer = LogBuffer()
    entry = buffer.record("custom", "message", severity="verbose")
    assert entry.category == "system"
    assert entry.severity == "info"
    assert entry.render().endswith("[system] info: message")
