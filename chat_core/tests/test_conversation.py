from chat_core.domain.conversation import Conversation
from chat_core.domain.models import ChatMessage


def test_conversation_keeps_insertion_order():
    conv = Conversation()
    conv.add_user_text("one")
    conv.add_message(ChatMessage(role="assistant", content="two"))
    conv.add_user_text("three")
    assert [m.content for m in conv] == ["one", "two", "three"]
    assert conv.messages[0].role == "user"
    assert len(conv) == 3


def test_conversation_messages_is_a_copy():
    conv = Conversation()
    conv.add_user_text("hi")
    snapshot = conv.messages
    snapshot.append(ChatMessage(role="user", content="x"))
    assert len(conv) == 1


def test_conversation_clear():
    conv = Conversation()
    conv.clear()
    assert len(conv) == 0
    conv.add_user_text("hi")
    conv.clear()
    conv.clear()
    assert len(conv) == 0
