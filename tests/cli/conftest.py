import functools

import click.testing
import pytest

from dokit.cli import CLIControls, main


@pytest.fixture(autouse=True)
def configure(mocker):
    # The CLI's logging setup adds handlers to the root logger; keep it clean for other tests.
    return mocker.patch('dokit._core.engines.loggers.configure')


@pytest.fixture(autouse=True)
def no_token(monkeypatch):
    monkeypatch.delenv('DIGITALOCEAN_TOKEN', raising=False)


@pytest.fixture()
def runner():
    runner = click.testing.CliRunner()
    return runner


@pytest.fixture()
def invoke(runner):
    return functools.partial(runner.invoke, main)


@pytest.fixture()
def controls():
    return CLIControls()
