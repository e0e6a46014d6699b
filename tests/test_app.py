import dataclasses

from randpub.adapters.file_writer import FileStringWriter
from randpub.adapters.syslog import SyslogSender
from randpub.adapters.webhook import WebhookForwarder
from randpub.app import build_consumers
from randpub.config import Config


def _config(**changes) -> Config:
    base = Config(
        log_level="INFO",
        min_length=8,
        max_length=16,
        min_interval_ms=1000,
        max_interval_ms=5000,
        stop_timeout_ms=1000,
        file_writer=True,
        output_dir="/tmp/randpub-test",
        syslog=True,
        syslog_host="localhost",
        syslog_port=514,
        syslog_hostname="randpub",
        webhook_url=None,
        http_api=False,
        http_host="127.0.0.1",
        http_port=8000,
    )
    return dataclasses.replace(base, **changes)


def test_default_consumers_are_file_and_syslog():
    kinds = [type(c) for c in build_consumers(_config())]
    assert kinds == [FileStringWriter, SyslogSender]


def test_webhook_enabled_by_url_only():
    consumers = build_consumers(_config(file_writer=False, syslog=False, webhook_url="http://h/v"))
    assert [type(c) for c in consumers] == [WebhookForwarder]


def test_everything_disabled():
    assert build_consumers(_config(file_writer=False, syslog=False)) == []


def test_output_dir_is_passed_through():
    (writer,) = build_consumers(_config(syslog=False, output_dir="/srv/values"))
    assert writer.output_dir == "/srv/values"
