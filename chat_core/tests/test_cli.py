from chat_core import cli
from chat_core.agents.chat_bot import ChatBot
from chat_core.domain.exceptions import CredentialError, RemoteStatusError
from chat_core.domain.models import ChatMessage


class FakeProvider:
    name = "fake"

    def __init__(self, replies):
        self._replies = list(replies)
        self.calls = []

    def send(self, messages):
        self.calls.append(list(messages))
        reply = self._replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


def run(lines, replies):
    inputs = iter(lines)
    out = []

    def read(prompt):
        try:
            return next(inputs)
        except StopIteration:
            raise EOFError

    provider = FakeProvider(replies)
    bot = ChatBot(provider)
    cli.run_repl(bot, "gpt-3.5-turbo", read=read, write=out.append)
    return bot, provider, out


def test_format_reply_uses_thousands_separator():
    assert cli.format_reply("hi", 1234567) == "GPT [1,234,567 tokens used for this context and prompt]: hi"


def test_repl_submit_and_quit():
    bot, _, out = run(["Hi", "q", "never read"], [(ChatMessage(role="assistant", content="Hello!"), 42)])
    assert out == [
        f"> {cli.PROMPT_HELP}",
        "  [Sending chat to gpt-3.5-turbo...]",
        "GPT [42 tokens used for this context and prompt]: Hello!",
        "  [Exiting]",
    ]
    assert len(bot) == 2


def test_repl_clear_and_help():
    bot, provider, out = run(
        ["first", "c", "", "second"],
        [
            (ChatMessage(role="assistant", content="one"), 1),
            (ChatMessage(role="assistant", content="two"), 2),
        ],
    )
    assert "  [Clearing chat history]" in out
    assert out.count(f"> {cli.PROMPT_HELP}") == 2
    assert provider.calls[-1] == [ChatMessage(role="user", content="second")]
    assert out[-1] == "  [Exiting]"
    assert len(bot) == 2


def test_repl_continues_after_error():
    err = RemoteStatusError(code="API_ERROR", message="unsuccessful API request (code: 500)", http_status=500)
    bot, provider, out = run(
        ["Hi", "Again"],
        [err, (ChatMessage(role="assistant", content="ok"), 7)],
    )
    assert "  [Error] unsuccessful API request (code: 500)" in out
    assert "GPT [7 tokens used for this context and prompt]: ok" in out
    # 失败轮次的用户消息保留在历史中并随下一次请求发送
    assert [m.content for m in provider.calls[1]] == ["Hi", "Again"]
    assert len(bot) == 3


def test_main_exits_on_missing_credential(monkeypatch, capsys):
    def fail(cfg):
        raise CredentialError(code="MISSING_API_KEY", message="couldn't find OpenAI authentication key")

    monkeypatch.setattr(cli, "load_api_key", fail)
    monkeypatch.setattr(cli, "setup_logger", lambda level=None: None)
    assert cli.main([]) == 1
    assert "couldn't find OpenAI authentication key" in capsys.readouterr().err


def test_main_runs_repl_with_model_override(monkeypatch):
    seen = {}

    class FakeBot:
        def close(self):
            seen["closed"] = True

    def fake_from_api_key(api_key, cfg):
        seen["api_key"] = api_key
        seen["model"] = cfg.chat_model
        return FakeBot()

    monkeypatch.setattr(cli, "load_api_key", lambda cfg: "sk-test")
    monkeypatch.setattr(cli, "setup_logger", lambda level=None: None)
    monkeypatch.setattr(cli.ChatBot, "from_api_key", staticmethod(fake_from_api_key))
    monkeypatch.setattr(cli, "run_repl", lambda bot, model: seen.setdefault("repl_model", model))

    assert cli.main(["--model", "gpt-4o-mini"]) == 0
    assert seen == {"api_key": "sk-test", "model": "gpt-4o-mini", "repl_model": "gpt-4o-mini", "closed": True}
