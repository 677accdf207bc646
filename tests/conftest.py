import pytest

import dbsetup.services.polling as polling_module
from dbsetup.models import CommandResult
from dbsetup.services.polling import PollingService


class DummyLogger:
    def debug(self, *_args, **_kwargs):
        return None

    def info(self, *_args, **_kwargs):
        return None

    def warning(self, *_args, **_kwargs):
        return None

    def error(self, *_args, **_kwargs):
        return None

    def exception(self, *_args, **_kwargs):
        return None


class DummyConsole:
    def __init__(self):
        self.lines = []

    def print(self, *args, **_kwargs):
        self.lines.append(" ".join(str(arg) for arg in args))

    def rule(self, *_args, **_kwargs):
        return None

    @property
    def text(self):
        return "\n".join(self.lines)


class FakeRunner:
    """Returns scripted results per command; unknown commands succeed silently."""

    def __init__(self):
        self.calls = []
        self.responses = {}

    def add(self, cmd, *results):
        self.responses.setdefault(tuple(cmd), []).extend(results)

    def run(self, cmd, interactive=False, check=False, timeout=None, redact=()):
        self.calls.append((tuple(cmd), interactive))
        queue = self.responses.get(tuple(cmd))
        if not queue:
            return CommandResult(0)
        if len(queue) > 1:
            return queue.pop(0)
        return queue[0]

    def commands(self):
        return [cmd for cmd, _interactive in self.calls]


class FakePrompts:
    """Feeds queued answers; text answers are re-asked while the validator rejects them."""

    def __init__(self, selects=None, texts=None, confirms=None):
        self.selects = list(selects or [])
        self.texts = list(texts or [])
        self.confirms = list(confirms or [])
        self.validation_errors = []
        self.messages = []

    def select(self, message, choices, default=None):
        self.messages.append(message)
        if not self.selects:
            return default
        answer = self.selects.pop(0)
        assert answer in [value for value, _label in choices]
        return answer

    def text(self, message, default=None, validate=None):
        self.messages.append(message)
        while True:
            answer = self.texts.pop(0) if self.texts else default
            error = validate(answer) if validate else None
            if error is None:
                return answer
            self.validation_errors.append(error)
            if not self.texts:
                raise AssertionError(f"No valid answer queued for: {message}")

    def confirm(self, message, default=False):
        self.messages.append(message)
        if not self.confirms:
            return default
        return self.confirms.pop(0)


@pytest.fixture
def logger():
    return DummyLogger()


@pytest.fixture
def console():
    return DummyConsole()


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def no_sleep(monkeypatch):
    sleeps = []
    monkeypatch.setattr(polling_module.time, "sleep", lambda seconds: sleeps.append(seconds))
    return sleeps


@pytest.fixture
def poller(logger, console, no_sleep):
    return PollingService(logger=logger, console=console)


@pytest.fixture
def make_provider(runner, poller, logger, console, tmp_path):
    opened = []

    def factory(provider_cls, prompts):
        provider = provider_cls(
            runner=runner,
            prompts=prompts,
            poller=poller,
            logger=logger,
            console=console,
            cwd=str(tmp_path),
            browser_opener=lambda url: opened.append(url) or True,
        )
        provider.opened_urls = opened
        return provider

    return factory


@pytest.fixture
def make_prompts():
    return FakePrompts
