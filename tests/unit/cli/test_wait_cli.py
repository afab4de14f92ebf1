"""Unit tests for ``chartgen helm wait``."""

from __future__ import annotations

import yaml
from click.testing import CliRunner

from helm_chartgen.cli.main import cli
from helm_chartgen.cli.utils import ExitCode


class TestWaitCommand:
    """Tests for the wait command."""

    def test_service_with_port(self, cli_runner: CliRunner) -> None:
        """service:port prints the nc init-container."""
        result = cli_runner.invoke(cli, ["helm", "wait", "demo-db:5432"])

        assert result.exit_code == ExitCode.SUCCESS, result.output
        assert yaml.safe_load(result.stdout) == [
            {
                "name": "wait-for-demo-db",
                "image": "busybox:1.34.1",
                "command": [
                    "sh",
                    "-c",
                    "for i in $(seq 1 200); do nc -z -w3 demo-db 5432 "
                    "&& exit 0; done; exit 1",
                ],
            }
        ]

    def test_service_only(self, cli_runner: CliRunner) -> None:
        """A bare service name prints the nslookup init-container."""
        result = cli_runner.invoke(cli, ["helm", "wait", "demo-db"])

        assert result.exit_code == ExitCode.SUCCESS, result.output
        (container,) = yaml.safe_load(result.stdout)
        assert container["command"][2] == (
            "until nslookup demo-db; do echo waiting for service; sleep 2; done"
        )

    def test_custom_image_and_template(self, cli_runner: CliRunner) -> None:
        """--image and --port-template are honoured."""
        result = cli_runner.invoke(
            cli,
            [
                "helm",
                "wait",
                "kafka:9092",
                "--image",
                "alpine:3.19",
                "--port-template",
                "nc -z ::service-name ::service-port",
            ],
        )

        assert result.exit_code == ExitCode.SUCCESS, result.output
        (container,) = yaml.safe_load(result.stdout)
        assert container["image"] == "alpine:3.19"
        assert container["command"] == ["sh", "-c", "nc -z kafka 9092"]

    def test_missing_service_name(self, cli_runner: CliRunner) -> None:
        """A value without a service name is rejected."""
        result = cli_runner.invoke(cli, ["helm", "wait", ":5432"])

        assert result.exit_code == ExitCode.VALIDATION_ERROR
        assert "Nothing to wait for" in result.stderr
        assert result.stdout == ""

    def test_empty_template(self, cli_runner: CliRunner) -> None:
        """An empty selected template is rejected."""
        result = cli_runner.invoke(
            cli, ["helm", "wait", "demo-db", "--only-template", ""]
        )

        assert result.exit_code == ExitCode.VALIDATION_ERROR
        assert "service-only command template is empty" in result.stderr

    def test_unresolved_placeholder(self, cli_runner: CliRunner) -> None:
        """A port placeholder in the service-only template is rejected."""
        result = cli_runner.invoke(
            cli,
            [
                "helm",
                "wait",
                "demo-db",
                "--only-template",
                "nc -z ::service-name ::service-port",
            ],
        )

        assert result.exit_code == ExitCode.VALIDATION_ERROR
        assert "'::service-port' unresolved" in result.stderr
