from myftp.handler_base import CommandHandler
from myftp.registry import CommandRegistry


class DummyHandler(CommandHandler):
    def handle_request(self, args, session):
        pass


def test_register_and_get():
    registry = CommandRegistry()
    handler = DummyHandler()
    registry.register("NOOP", handler)
    assert registry.get("NOOP") is handler
    assert "NOOP" in registry


def test_unknown_command():
    registry = CommandRegistry()
    assert "USER" not in registry
    assert registry.get("USER") is None


def test_register_replaces():
    registry = CommandRegistry()
    first, second = DummyHandler(), DummyHandler()
    registry.register("HELP", first)
    registry.register("HELP", second)
    assert registry.get("HELP") is second


def test_lookup_is_case_sensitive():
    registry = CommandRegistry()
    registry.register("PWD", DummyHandler())
    assert "pwd" not in registry