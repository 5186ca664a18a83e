"""Tests for the user-facing message channel"""

from unittest.mock import Mock

from core.messages import FILE_NOT_FOUND, MessageChannel, SnackbarMessage


class TestMessageChannel:
    def test_delivers_to_subscribers(self):
        channel = MessageChannel()
        handler = Mock()
        channel.subscribe(handler)

        message = SnackbarMessage.of(FILE_NOT_FOUND)
        channel.emit(message)

        handler.assert_called_once_with(message)
        assert channel.consume() == []

    def test_holds_messages_until_first_subscriber(self):
        channel = MessageChannel()
        message = SnackbarMessage.of(FILE_NOT_FOUND)
        channel.emit(message)

        first, second = Mock(), Mock()
        channel.subscribe(first)
        channel.subscribe(second)

        first.assert_called_once_with(message)
        second.assert_not_called()

    def test_failing_handler_does_not_block_others(self):
        channel = MessageChannel()
        broken = Mock(side_effect=RuntimeError("boom"))
        healthy = Mock()
        channel.subscribe(broken)
        channel.subscribe(healthy)

        channel.emit(SnackbarMessage.of(FILE_NOT_FOUND))

        healthy.assert_called_once()

    def test_unsubscribe(self):
        channel = MessageChannel()
        handler = Mock()
        channel.subscribe(handler)
        channel.unsubscribe(handler)

        channel.emit(SnackbarMessage.of(FILE_NOT_FOUND))

        handler.assert_not_called()
        assert len(channel.consume()) == 1

    def test_unknown_key_uses_key_as_text(self):
        assert SnackbarMessage.of("custom").message == "custom"
        assert "find the selected file" in SnackbarMessage.of(FILE_NOT_FOUND).message
