from data_designer_slop_miner.protocol import (
    BatchRequest,
    ChatMessage,
    CompleteEvent,
    ErrorEvent,
    ProgressEvent,
    parse_event,
)


class TestChatMessage:
    def test_host_payload_shape(self):
        message = ChatMessage.model_validate({"mes": "Hello there.", "is_user": False, "name": "Narrator"})
        assert message.text == "Hello there."
        assert message.is_analyzable

    def test_user_and_empty_messages_are_skipped(self):
        assert not ChatMessage(text="Hi.", is_user=True).is_analyzable
        assert not ChatMessage(text="").is_analyzable
        assert not ChatMessage.model_validate({"mes": 12}).is_analyzable

    def test_coerce(self):
        assert ChatMessage.coerce("Plain text.").text == "Plain text."
        assert ChatMessage.coerce({"mes": "x", "is_user": True}).is_user
        message = ChatMessage(text="same")
        assert ChatMessage.coerce(message) is message


class TestBatchRequest:
    def test_payload_uses_host_names(self):
        request = BatchRequest(messages=[ChatMessage(text="Hi.")], covered_patterns=["knowing smile"])
        payload = request.to_payload()
        assert payload["command"] == "start"
        assert payload["coveredPatterns"] == ["knowing smile"]
        assert payload["messages"] == [{"mes": "Hi.", "is_user": False}]
        assert payload["config"]["slopThreshold"] == 3.0
        assert BatchRequest.model_validate(payload) == request

    def test_messages_accept_plain_strings(self):
        request = BatchRequest(messages=["Hi.", {"mes": "Hello.", "is_user": True}, ChatMessage(text="Bye.")])
        assert request.messages == [
            ChatMessage(text="Hi."),
            ChatMessage(text="Hello.", is_user=True),
            ChatMessage(text="Bye."),
        ]


class TestEvents:
    def test_parse_discriminates_on_type(self):
        assert isinstance(parse_event({"type": "progress", "processed": 5, "total": 10}), ProgressEvent)
        assert isinstance(parse_event({"type": "error", "message": "boom"}), ErrorEvent)
        complete = parse_event({
            "type": "complete",
            "finalIndex": {"records": {}},
            "leaderboard": {"merged": {}, "remaining": {}},
            "messagesAnalyzed": 3,
        })
        assert isinstance(complete, CompleteEvent)
        assert complete.messages_analyzed == 3

    def test_progress_payload(self):
        payload = ProgressEvent(processed=5, total=10, ai_analyzed=4).to_payload()
        assert payload == {"type": "progress", "processed": 5, "total": 10, "aiAnalyzed": 4}
